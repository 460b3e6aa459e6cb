import logging
from typing import Optional
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from lojinic.models.account_session import AccountSession
from lojinic.models.user import User

logger = logging.getLogger(__name__)


class SessionRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_chat_id(self, chat_id: int) -> Optional[AccountSession]:
        result = await self.session.execute(
            select(AccountSession).filter_by(chat_id=chat_id)
        )
        return result.scalars().first()

    async def save(self, chat_id: int, user: User) -> AccountSession:
        record = await self.session.merge(
            AccountSession(
                chat_id=chat_id,
                uid=user.uid,
                email=user.email,
                is_admin=user.is_admin,
                display_name=user.display_name,
            )
        )
        await self.session.commit()
        await self.session.refresh(record)
        return record

    async def delete(self, chat_id: int) -> int:
        result = await self.session.execute(
            delete(AccountSession).where(AccountSession.chat_id == chat_id)
        )
        await self.session.commit()
        return result.rowcount
