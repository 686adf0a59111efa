# config/cache.py
from typing import Awaitable, Callable, Optional
from redis.asyncio import Redis, from_url
from config.settings import settings

RedisFactory = Callable[[], Awaitable[Redis]]

_client: Optional[Redis] = None


async def get_redis() -> Redis:
    global _client
    if _client is None:
        _client = from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,  # set members and lock values are plain names
            socket_keepalive=True,
            socket_timeout=settings.REQUEST_TIMEOUT_SECONDS,
            socket_connect_timeout=settings.REQUEST_TIMEOUT_SECONDS,
            health_check_interval=30,
        )
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
