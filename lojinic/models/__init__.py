"""
Модели данных витрины LojinIC.
"""

from .store import Store, StoreStatus, PlanType
from .product import Product
from .system_config import SystemConfig
from .account_session import AccountSession
from .user import User

__all__ = [
    "Store",
    "StoreStatus",
    "PlanType",
    "Product",
    "SystemConfig",
    "AccountSession",
    "User",
]
