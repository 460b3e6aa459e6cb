from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
from lojinic.core.config import DEFAULT_STORE_COLOR
from lojinic.repositories.store_repository import StoreRepository
from lojinic.models.store import Store, StoreStatus, PlanType
from lojinic.utils.ids import generate_store_id
import logging

logger = logging.getLogger(__name__)

PLAN_PRICES = {
    PlanType.MONTHLY.value: 25.0,
    PlanType.ANNUAL.value: 300.0,
}


@dataclass
class StorePatch:
    """Изменяемые поля магазина. None означает "не трогать"."""

    name: Optional[str] = None
    whatsapp: Optional[str] = None
    color: Optional[str] = None
    status: Optional[Union[StoreStatus, str]] = None
    plan: Optional[Union[PlanType, str]] = None

    def values(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "status":
                value = StoreStatus(value).value
            elif f.name == "plan":
                value = PlanType(value).value
            result[f.name] = value
        return result


class StoreService:
    def __init__(self, session: AsyncSession):
        self.repo = StoreRepository(session)

    async def create_store(
        self, owner_id: str, name: str, plan: Union[PlanType, str] = PlanType.MONTHLY
    ) -> Store:
        """
        Создает магазин владельца. Повторный вызов для того же владельца
        возвращает уже существующий магазин.

        Raises:
            ValueError: Если не указано название магазина
        """
        if not name or not name.strip():
            raise ValueError("Nome da loja é obrigatório")

        existing = await self.repo.get_by_owner(owner_id)
        if existing:
            return existing

        store = Store(
            id=generate_store_id(),
            owner_id=owner_id,
            name=name.strip(),
            whatsapp="",
            color=DEFAULT_STORE_COLOR,
            status=StoreStatus.PENDING.value,
            plan=PlanType(plan).value,
        )
        store = await self.repo.create(store)
        logger.info("Создан магазин %s (%s) для %s", store.name, store.id, owner_id)
        return store

    async def get_my_store(self, owner_id: str) -> Optional[Store]:
        return await self.repo.get_by_owner(owner_id)

    async def get_store_by_id(self, store_id: str) -> Optional[Store]:
        return await self.repo.get_by_id(store_id)

    async def get_all_stores(self) -> List[Store]:
        return await self.repo.get_all()

    async def search_stores(self, term: str) -> List[Store]:
        """Поиск магазинов по подстроке названия без учета регистра"""
        if not term or not term.strip():
            return await self.repo.get_all()
        return await self.repo.search_by_name(term.strip())

    async def update_store(self, store_id: str, patch: StorePatch) -> Optional[Store]:
        """Применить к магазину заданные поля. Неизвестный id ничего не меняет."""
        store = await self.repo.get_by_id(store_id)
        if not store:
            logger.warning("Магазин %s не найден, обновление пропущено", store_id)
            return None

        values = patch.values()
        if not values:
            return store

        logger.info("Обновление магазина %s: %s", store_id, values)
        return await self.repo.update(store, values)

    async def approve(self, store_id: str) -> Optional[Store]:
        """Одобрение администратором"""
        return await self.update_store(store_id, StorePatch(status=StoreStatus.ACTIVE))

    async def simulate_payment(self, store_id: str) -> Optional[Store]:
        """Демо-оплата подписки: магазин активируется без проверки платежа"""
        logger.info("Симуляция оплаты для магазина %s", store_id)
        return await self.update_store(store_id, StorePatch(status=StoreStatus.ACTIVE))

    async def toggle_status(self, store_id: str) -> Optional[Store]:
        """
        Переключатель администратора: active -> pending, остальное -> active.
        Статус blocked этим переключателем не выставляется.
        """
        store = await self.repo.get_by_id(store_id)
        if not store:
            return None
        new_status = (
            StoreStatus.PENDING
            if store.status == StoreStatus.ACTIVE.value
            else StoreStatus.ACTIVE
        )
        return await self.update_store(store_id, StorePatch(status=new_status))

    async def get_stats(self) -> Dict[str, int]:
        counts = await self.repo.count_by_status()
        return {
            "total": sum(counts.values()),
            "active": counts.get(StoreStatus.ACTIVE.value, 0),
        }
