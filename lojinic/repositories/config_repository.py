from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from lojinic.models.system_config import SystemConfig, SYSTEM_CONFIG_ID


class ConfigRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self) -> Optional[SystemConfig]:
        result = await self.session.execute(
            select(SystemConfig).filter_by(id=SYSTEM_CONFIG_ID)
        )
        return result.scalars().first()

    async def replace(self, admin_pix_key: str) -> SystemConfig:
        """Перезаписать конфигурацию целиком"""
        config = await self.session.merge(
            SystemConfig(id=SYSTEM_CONFIG_ID, admin_pix_key=admin_pix_key)
        )
        await self.session.commit()
        await self.session.refresh(config)
        return config
