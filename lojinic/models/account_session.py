from datetime import datetime
from sqlalchemy import Column, BigInteger, String, Boolean, DateTime
from lojinic.core.database import Base


class AccountSession(Base):
    __tablename__ = "account_sessions"

    chat_id = Column(BigInteger, primary_key=True)
    uid = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    display_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
