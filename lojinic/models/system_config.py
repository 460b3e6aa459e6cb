from sqlalchemy import Column, Integer, String
from lojinic.core.database import Base

SYSTEM_CONFIG_ID = 1


class SystemConfig(Base):
    __tablename__ = "system_config"

    id = Column(Integer, primary_key=True, default=SYSTEM_CONFIG_ID)
    admin_pix_key = Column(String, nullable=False)
