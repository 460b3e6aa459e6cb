import pytest
import json
from unittest.mock import patch, AsyncMock
from lojinic.core.config import CATALOG_CACHE_TTL
from lojinic.models.product import Product
from lojinic.utils.cache import (
    get_cached_data,
    set_cached_data,
    invalidate_cache,
    get_cache_key,
    catalog_cache_key,
    get_cached_catalog,
    cache_catalog,
    invalidate_catalog,
)


@pytest.mark.asyncio
async def test_cache_operations():
    """Тест базовых операций с кэшем"""

    redis_mock = AsyncMock()
    redis_mock.get.return_value = None

    test_key = "test_key"
    test_data = {"name": "Bolo", "price": 20.0}

    with patch("lojinic.utils.cache.redis_client", redis_mock):
        assert await get_cached_data(test_key) is None
        redis_mock.get.assert_called_once_with(test_key)

    redis_mock.reset_mock()
    with patch("lojinic.utils.cache.redis_client", redis_mock):
        assert await set_cached_data(test_key, test_data, ttl=60) is True
        redis_mock.set.assert_called_once_with(test_key, json.dumps(test_data), ex=60)

    redis_mock.reset_mock()
    redis_mock.get.return_value = json.dumps(test_data)
    with patch("lojinic.utils.cache.redis_client", redis_mock):
        assert await get_cached_data(test_key) == test_data

    redis_mock.reset_mock()
    with patch("lojinic.utils.cache.redis_client", redis_mock):
        await invalidate_cache(test_key)
        redis_mock.delete.assert_called_once_with(test_key)


@pytest.mark.asyncio
async def test_cache_errors_are_misses():
    """Недоступный Redis не ломает витрину"""

    redis_mock = AsyncMock()
    redis_mock.get.side_effect = ConnectionError("redis down")
    redis_mock.set.side_effect = ConnectionError("redis down")
    redis_mock.delete.side_effect = ConnectionError("redis down")

    with patch("lojinic.utils.cache.redis_client", redis_mock):
        assert await get_cached_data("k") is None
        assert await set_cached_data("k", {"a": 1}) is False
        assert await invalidate_cache("k") == 0


def test_cache_key_generation():
    """Тест генерации ключей кэша"""

    assert get_cache_key("store", 1) == "store:1"
    assert catalog_cache_key("store_1_abc") == "catalog:store_1_abc"

    assert get_cache_key("catalog", "store_1", "v2") == "catalog:store_1:v2"

    with pytest.raises(ValueError):
        get_cache_key()


@pytest.mark.asyncio
async def test_catalog_cache():
    """Тест кэширования каталога витрины"""

    redis_mock = AsyncMock()
    product = Product(
        id="p_1",
        store_id="store_1",
        name="Bolo",
        price=20.0,
        image_url="https://img.example/bolo.png",
        featured=True,
        description="Fatia",
    )

    with patch("lojinic.utils.cache.redis_client", redis_mock):
        await cache_catalog("store_1", [product])
        redis_mock.set.assert_called_once_with(
            "catalog:store_1",
            json.dumps([product.to_dict()]),
            ex=CATALOG_CACHE_TTL,
        )

        redis_mock.get.return_value = json.dumps([product.to_dict()])
        cached = await get_cached_catalog("store_1")
        assert cached == [product.to_dict()]
        redis_mock.get.assert_called_once_with("catalog:store_1")

        await invalidate_catalog("store_1")
        redis_mock.delete.assert_called_once_with("catalog:store_1")
