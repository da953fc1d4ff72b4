import asyncio
import logging
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from src.core.config import redis_settings

_log = logging.getLogger(__name__)

_client: Optional[aioredis.Redis] = None
_pending: Optional[asyncio.Task] = None


async def _create_redis_client() -> Optional[aioredis.Redis]:
    url = redis_settings.url
    _log.info(f"Creating Redis client for score cache at {url}")
    try:
        # from_url does not connect; the timeouts bound every later command
        return aioredis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=1,
            socket_timeout=2,
        )
    except (RedisError, ValueError) as exc:
        _log.error(f"Invalid Redis configuration {url}, score cache disabled ({exc})")
        return None


async def get_redis() -> Optional[aioredis.Redis]:
    """
    Return the shared Redis client, created on first use.

    Concurrent first callers share one creation task. Returns None when the
    client cannot be created; the next call tries again.
    """
    global _client, _pending
    if _client is not None:
        return _client
    if _pending is None:
        _pending = asyncio.create_task(_create_redis_client())
    task = _pending
    try:
        _client = await task
    finally:
        if _pending is task:
            _pending = None
    return _client


async def close_redis() -> None:
    """Close and forget the shared client, if one was created."""
    global _client
    client, _client = _client, None
    if client is None:
        return
    _log.info("Closing Redis score cache client")
    try:
        await client.aclose()
    except RedisError as e:
        _log.warning(f"Error closing Redis connection: {e}")
