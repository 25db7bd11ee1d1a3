"""Optional Redis handle. Every helper degrades to a no-op when Redis is off or down."""

import json
import logging
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.core.config import settings

logger = logging.getLogger(__name__)

_client: redis.Redis | None = None


async def init_redis() -> redis.Redis | None:
    """Connect once at startup when USE_REDIS is set. Failure leaves caching disabled."""
    global _client
    if not settings.USE_REDIS:
        logger.info("Redis disabled (USE_REDIS=false)")
        return None
    if _client is not None:
        return _client

    client = redis.from_url(settings.REDIS_URL, decode_responses=True)
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        logger.warning("Redis unavailable at %s, caching disabled: %s", settings.REDIS_URL, e)
        await client.aclose()
        return None

    logger.info("Redis connected: %s", settings.REDIS_URL)
    _client = client
    return _client


def get_redis() -> redis.Redis | None:
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def cache_get_json(key: str) -> Any | None:
    client = get_redis()
    if client is None:
        return None
    try:
        raw = await client.get(key)
    except RedisError as e:
        logger.warning("Cache read failed for %s: %s", key, e)
        return None
    return json.loads(raw) if raw else None


async def cache_set_json(key: str, value: Any, ttl_seconds: int) -> None:
    client = get_redis()
    if client is None:
        return
    try:
        await client.set(key, json.dumps(value, default=str), ex=ttl_seconds)
    except RedisError as e:
        logger.warning("Cache write failed for %s: %s", key, e)


async def cache_delete(key: str) -> None:
    client = get_redis()
    if client is None:
        return
    try:
        await client.delete(key)
    except RedisError as e:
        logger.warning("Cache invalidation failed for %s: %s", key, e)
