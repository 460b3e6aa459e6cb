import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, patch
from aiogram.types import Message, User as TgUser, Chat
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.memory import MemoryStorage
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
import sys
from pathlib import Path


sys.path.append(str(Path(__file__).resolve().parent.parent))

from lojinic.core.database import Base
import lojinic.models  # noqa: F401
from lojinic.models.user import User


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, future=True
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    async_session = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with async_session() as session:
        yield session


class SessionContext:
    """Подменяет get_session() в хендлерах тестовой сессией"""

    def __init__(self, session):
        self.session = session

    async def __aenter__(self):
        return self.session

    async def __aexit__(self, *args):
        pass


@pytest.fixture
def patch_session(session):
    def _patch(module: str):
        return patch(f"{module }.get_session", return_value=SessionContext(session))

    return _patch


@pytest.fixture
def create_message():
    def _create_message(text="", chat_id=123456789, from_user_id=123456789):
        message = AsyncMock(spec=Message)
        message.text = text
        message.chat = Chat(id=chat_id, type="private")
        message.from_user = TgUser(id=from_user_id, is_bot=False, first_name="Test")

        message.answer = AsyncMock()
        message.answer.return_value = AsyncMock()
        return message

    return _create_message


@pytest.fixture
def state():
    storage = MemoryStorage()
    return FSMContext(storage=storage, key="test")


@pytest.fixture
def merchant_user():
    return User(
        uid="user_maria", email="maria@gmail.com", is_admin=False, display_name="maria"
    )


@pytest.fixture
def admin_user():
    return User(
        uid="admin_uid", email="admin@lojinic.com", is_admin=True, display_name="admin"
    )


@pytest.fixture
def no_catalog_cache():
    """Витрина и продавец без Redis: кэш каталога всегда пуст"""
    with patch(
        "lojinic.handlers.storefront_handler.get_cached_catalog",
        AsyncMock(return_value=None),
    ), patch(
        "lojinic.handlers.storefront_handler.cache_catalog", AsyncMock(return_value=True)
    ), patch(
        "lojinic.handlers.merchant_handler.invalidate_catalog",
        AsyncMock(return_value=1),
    ) as invalidate:
        yield invalidate
