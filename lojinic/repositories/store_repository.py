import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select
from sqlalchemy.sql import func
from lojinic.models.store import Store

logger = logging.getLogger(__name__)


class StoreRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> List[Store]:
        result = await self.session.execute(
            select(Store).order_by(Store.created_at, Store.id)
        )
        return result.scalars().all()

    async def search_by_name(self, term: str) -> List[Store]:
        result = await self.session.execute(
            select(Store)
            .where(func.lower(Store.name).contains(term.lower()))
            .order_by(Store.created_at, Store.id)
        )
        return result.scalars().all()

    async def get_by_id(self, store_id: str) -> Optional[Store]:
        result = await self.session.execute(select(Store).filter_by(id=store_id))
        return result.scalars().first()

    async def get_by_owner(self, owner_id: str) -> Optional[Store]:
        result = await self.session.execute(
            select(Store).filter_by(owner_id=owner_id)
        )
        return result.scalars().first()

    async def count_by_status(self) -> Dict[str, int]:
        result = await self.session.execute(
            select(Store.status, func.count(Store.id)).group_by(Store.status)
        )
        return {status: count for status, count in result.all()}

    async def create(self, store: Store) -> Store:
        try:
            self.session.add(store)
            await self.session.commit()
            await self.session.refresh(store)
            return store
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Ошибка создания магазина {store .id }: {e }")
            raise

    async def update(self, store: Store, values: Dict[str, Any]) -> Store:
        """Записать в магазин только переданные поля"""
        for field, value in values.items():
            setattr(store, field, value)
        try:
            self.session.add(store)
            await self.session.commit()
            await self.session.refresh(store)
            return store
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Ошибка обновления магазина {store .id }: {e }")
            raise
