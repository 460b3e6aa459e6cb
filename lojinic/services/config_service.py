from sqlalchemy.ext.asyncio import AsyncSession
from lojinic.core.config import DEFAULT_PIX_KEY
from lojinic.models.system_config import SystemConfig, SYSTEM_CONFIG_ID
from lojinic.repositories.config_repository import ConfigRepository
import logging

logger = logging.getLogger(__name__)


class ConfigService:
    def __init__(self, session: AsyncSession):
        self.repo = ConfigRepository(session)

    async def get_config(self) -> SystemConfig:
        """Текущая конфигурация или значение по умолчанию, если ничего не сохранено"""
        config = await self.repo.get()
        if config is None:
            return SystemConfig(id=SYSTEM_CONFIG_ID, admin_pix_key=DEFAULT_PIX_KEY)
        return config

    async def update_config(self, admin_pix_key: str) -> SystemConfig:
        logger.info("Обновление системного Pix-ключа")
        return await self.repo.replace(admin_pix_key)
