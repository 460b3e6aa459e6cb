import json
import logging
from typing import Any, Dict, List, Optional
from lojinic.core.config import REDIS_DSN, CATALOG_CACHE_TTL
import redis.asyncio as redis

logger = logging.getLogger(__name__)

# Соединение открывается лениво при первой команде
redis_client = redis.from_url(REDIS_DSN, decode_responses=True)


def get_cache_key(*args: Any) -> str:
    """
    Генерирует ключ для кэша из частей, разделенных двоеточием.

    Args:
        *args: Части ключа

    Returns:
        str: Сгенерированный ключ кэша
    """
    if not args:
        raise ValueError("Cache key cannot be empty")

    return ":".join(str(arg) for arg in args)


async def get_cached_data(key: str) -> Optional[Any]:
    """Данные из кэша или None, если ключа нет или Redis недоступен"""
    try:
        data = await redis_client.get(key)
        if data:
            return json.loads(data)
        return None
    except Exception as e:
        logger.error(f"Error getting data from cache: {e}")
        return None


async def set_cached_data(key: str, data: Any, ttl: int = 3600) -> bool:
    try:
        await redis_client.set(key, json.dumps(data), ex=ttl)
        return True
    except Exception as e:
        logger.error(f"Error setting data to cache: {e}")
        return False


async def invalidate_cache(key: str) -> int:
    """Удаляет ключ из кэша. Возвращает количество удаленных ключей."""
    try:
        return await redis_client.delete(key)
    except Exception as e:
        logger.error(f"Error invalidating cache: {e}")
        return 0


def catalog_cache_key(store_id: str) -> str:
    return get_cache_key("catalog", store_id)


async def get_cached_catalog(store_id: str) -> Optional[List[Dict[str, Any]]]:
    return await get_cached_data(catalog_cache_key(store_id))


async def cache_catalog(store_id: str, products) -> bool:
    return await set_cached_data(
        catalog_cache_key(store_id),
        [p.to_dict() for p in products],
        ttl=CATALOG_CACHE_TTL,
    )


async def invalidate_catalog(store_id: str) -> int:
    return await invalidate_cache(catalog_cache_key(store_id))
