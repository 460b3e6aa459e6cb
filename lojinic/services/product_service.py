from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from lojinic.core.config import DEFAULT_PRODUCT_IMAGE
from lojinic.repositories.product_repository import ProductRepository
from lojinic.models.product import Product
from lojinic.utils.ids import generate_product_id
import logging

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_NAME = "Produto Sem Nome"


@dataclass
class ProductData:
    store_id: str
    name: str = ""
    price: float = 0.0
    image_url: str = ""
    featured: bool = False
    description: str = ""


@dataclass
class ProductPatch:
    name: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    featured: Optional[bool] = None
    description: Optional[str] = None

    def values(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def match_product(
    name: str, featured: bool, query: str = "", featured_only: bool = False
) -> bool:
    """Условие фильтра витрины: подстрока в названии и категория "destaques"."""
    return (query or "").strip().lower() in (name or "").lower() and (
        not featured_only or bool(featured)
    )


def _check_price(price: float) -> float:
    price = float(price)
    if price < 0:
        raise ValueError("O preço não pode ser negativo")
    return price


class ProductService:
    def __init__(self, session: AsyncSession):
        self.repo = ProductRepository(session)

    async def get_products(self, store_id: str) -> List[Product]:
        return await self.repo.get_by_store(store_id)

    async def get_product(self, product_id: str) -> Optional[Product]:
        return await self.repo.get_by_id(product_id)

    async def add_product(self, data: ProductData) -> Product:
        """
        Добавляет товар в каталог магазина с новым уникальным id.

        Пустые поля формы заменяются значениями по умолчанию: название
        "Produto Sem Nome" и картинка-заглушка.

        Args:
            data: Данные товара

        Returns:
            Product: Созданный товар

        Raises:
            ValueError: Если цена отрицательная
        """
        product = Product(
            id=generate_product_id(),
            store_id=data.store_id,
            name=(data.name or "").strip() or DEFAULT_PRODUCT_NAME,
            price=_check_price(data.price or 0),
            image_url=(data.image_url or "").strip() or DEFAULT_PRODUCT_IMAGE,
            featured=bool(data.featured),
            description=data.description or "",
        )
        product = await self.repo.create(product)
        logger.info(
            "Товар %s (%s) добавлен в магазин %s", product.name, product.id, product.store_id
        )
        return product

    async def update_product(
        self, product_id: str, patch: ProductPatch
    ) -> Optional[Product]:
        product = await self.repo.get_by_id(product_id)
        if not product:
            logger.warning("Товар %s не найден, обновление пропущено", product_id)
            return None

        values = patch.values()
        if "price" in values:
            values["price"] = _check_price(values["price"])
        if "name" in values:
            values["name"] = values["name"].strip() or DEFAULT_PRODUCT_NAME
        if "image_url" in values:
            values["image_url"] = values["image_url"].strip() or DEFAULT_PRODUCT_IMAGE
        if not values:
            return product

        logger.info("Обновление товара %s: %s", product_id, values)
        return await self.repo.update(product, values)

    async def delete_product(self, product_id: str) -> bool:
        product = await self.repo.get_by_id(product_id)
        if not product:
            return False
        await self.repo.delete(product)
        logger.info("Товар %s удален из магазина %s", product_id, product.store_id)
        return True

    async def search_products(
        self, store_id: str, query: str = "", featured_only: bool = False
    ) -> List[Product]:
        return [
            p
            for p in await self.repo.get_by_store(store_id)
            if match_product(p.name, p.featured, query, featured_only)
        ]

    async def get_catalog_stats(self, store_id: str) -> Dict[str, Any]:
        products = await self.repo.get_by_store(store_id)
        return {
            "total": len(products),
            "featured": sum(1 for p in products if p.featured),
            "total_value": sum(p.price for p in products),
        }
