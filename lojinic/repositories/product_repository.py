import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select
from lojinic.models.product import Product

logger = logging.getLogger(__name__)


class ProductRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_store(self, store_id: str) -> List[Product]:
        result = await self.session.execute(
            select(Product)
            .filter_by(store_id=store_id)
            .order_by(Product.created_at, Product.id)
        )
        return result.scalars().all()

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        result = await self.session.execute(select(Product).filter_by(id=product_id))
        return result.scalars().first()

    async def create(self, product: Product) -> Product:
        try:
            self.session.add(product)
            await self.session.commit()
            await self.session.refresh(product)
            return product
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Ошибка создания товара {product .id }: {e }")
            raise

    async def update(self, product: Product, values: Dict[str, Any]) -> Product:
        for field, value in values.items():
            setattr(product, field, value)
        try:
            self.session.add(product)
            await self.session.commit()
            await self.session.refresh(product)
            return product
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Ошибка обновления товара {product .id }: {e }")
            raise

    async def delete(self, product: Product) -> None:
        try:
            await self.session.delete(product)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Ошибка удаления товара {product .id }: {e }")
            raise
