from typing import Optional
from lojinic.models.user import User


def is_admin(user: Optional[User]) -> bool:
    return bool(user and user.is_admin)


def is_merchant(user: Optional[User]) -> bool:
    """Любой вошедший пользователь, кроме администратора, считается продавцом"""
    return bool(user and not user.is_admin)
