"""
Middleware для восстановления сессии пользователя по chat_id
"""

from typing import Callable, Dict, Any, Awaitable
from aiogram import BaseMiddleware
from aiogram.types import Message
from lojinic.core.database import get_session
from lojinic.services.account_service import AccountService
import logging

logger = logging.getLogger(__name__)


class CurrentUserMiddleware(BaseMiddleware):
    """
    Кладет в данные хендлера current_user: пользователя из сохраненной
    сессии чата или None
    """

    async def __call__(
        self,
        handler: Callable[[Message, Dict[str, Any]], Awaitable[Any]],
        event: Message,
        data: Dict[str, Any],
    ) -> Any:

        chat = getattr(event, "chat", None)
        if chat is None:
            return await handler(event, data)

        try:
            async with get_session() as session:
                data["current_user"] = await AccountService(
                    session
                ).get_current_user(chat.id)
        except Exception as e:
            logger.error(f"Ошибка при восстановлении сессии чата {chat .id }: {e }")
            data["current_user"] = None

        return await handler(event, data)
