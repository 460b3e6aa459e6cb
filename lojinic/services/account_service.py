import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from lojinic.core.config import ADMIN_EMAIL
from lojinic.models.user import User
from lojinic.repositories.session_repository import SessionRepository

logger = logging.getLogger(__name__)

ADMIN_UID = "admin_uid"


def is_admin_email(email: str) -> bool:
    return email.strip().lower() == ADMIN_EMAIL


def build_user(email: str) -> User:
    """
    Собирает пользователя по email.

    uid детерминирован: для зарезервированного email администратора это
    "admin_uid", для остальных "user_<часть до @>". Разные домены с одинаковой
    локальной частью получают один и тот же uid.

    Args:
        email: Email, введенный при входе

    Returns:
        User: Пользователь сессии
    """
    email = email.strip()
    local_part = email.split("@")[0]
    is_admin = is_admin_email(email)
    uid = ADMIN_UID if is_admin else f"user_{local_part }"
    return User(uid=uid, email=email, is_admin=is_admin, display_name=local_part)


class AccountService:
    def __init__(self, session: AsyncSession):
        self.repo = SessionRepository(session)

    async def login(self, chat_id: int, email: str, password: str) -> User:
        """
        Вход по email. Пароль не проверяется, подходит любой.

        Raises:
            ValueError: Если email пустой
        """
        if not email or not email.strip():
            raise ValueError("Email é obrigatório")

        user = build_user(email)
        await self.repo.save(chat_id, user)
        logger.info(
            "Вход пользователя %s (admin=%s) в чате %s", user.uid, user.is_admin, chat_id
        )
        return user

    async def logout(self, chat_id: int) -> None:
        removed = await self.repo.delete(chat_id)
        if removed:
            logger.info("Сессия чата %s завершена", chat_id)

    async def get_current_user(self, chat_id: int) -> Optional[User]:
        """Восстановить пользователя из сохраненной сессии чата"""
        record = await self.repo.get_by_chat_id(chat_id)
        if not record:
            return None
        return User(
            uid=record.uid,
            email=record.email,
            is_admin=record.is_admin,
            display_name=record.display_name,
        )
