import enum
import time
from sqlalchemy import Column, String, BigInteger
from lojinic.core.database import Base


class StoreStatus(str, enum.Enum):
    ACTIVE = "active"
    PENDING = "pending"
    # Объявлен, но ни один сценарий его не выставляет
    BLOCKED = "blocked"


class PlanType(str, enum.Enum):
    MONTHLY = "mensal"
    ANNUAL = "anual"


def now_ms() -> int:
    return int(time.time() * 1000)


class Store(Base):
    __tablename__ = "stores"

    id = Column(String, primary_key=True, index=True)
    owner_id = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    whatsapp = Column(String, nullable=False, default="")
    color = Column(String, nullable=False)
    status = Column(String, nullable=False, default=StoreStatus.PENDING.value)
    plan = Column(String, nullable=False, default=PlanType.MONTHLY.value)
    created_at = Column(BigInteger, nullable=False, default=now_ms)

    @property
    def is_active(self) -> bool:
        return self.status == StoreStatus.ACTIVE.value
