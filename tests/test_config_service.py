import pytest
from lojinic.core.config import DEFAULT_PIX_KEY
from lojinic.services.config_service import ConfigService


@pytest.mark.asyncio
async def test_default_config(session):
    svc = ConfigService(session)

    config = await svc.get_config()
    assert config.admin_pix_key == DEFAULT_PIX_KEY


@pytest.mark.asyncio
async def test_update_config_replaces_singleton(session):
    svc = ConfigService(session)

    await svc.update_config("pix@lojinic.com")
    assert (await svc.get_config()).admin_pix_key == "pix@lojinic.com"

    await svc.update_config("11.222.333/0001-44")
    assert (await svc.get_config()).admin_pix_key == "11.222.333/0001-44"
