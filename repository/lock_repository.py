# repository/lock_repository.py
import asyncio
import logging
from typing import Optional, Protocol, Type
from types import TracebackType
from redis.exceptions import RedisError
from config.cache import RedisFactory, get_redis
from util.errors import LockUnavailableError

logger = logging.getLogger(__name__)

LOCK_PLACEHOLDER = "1"


class LockManager(Protocol):
    """
    Advisory, cross-process mutual exclusion keyed by name.

    Any backend with an atomic "insert if absent, expire after ttl" fits.
    """

    async def acquire(self, key: str, ttl_seconds: int) -> bool: ...

    async def release(self, key: str) -> None: ...

    def hold(self, key: str, ttl_seconds: int) -> "LockGuard": ...


class RedisLockManager:
    def __init__(self, client: RedisFactory = get_redis) -> None:
        self._client = client

    async def acquire(self, key: str, ttl_seconds: int) -> bool:
        # SET key 1 NX EX ttl -> True when we created it, None when it already existed
        try:
            r = await self._client()
            created = await r.set(key, LOCK_PLACEHOLDER, nx=True, ex=ttl_seconds)
        except (RedisError, OSError) as e:
            raise LockUnavailableError(f"lock acquire failed key={key}: {e}") from e
        return bool(created)

    async def release(self, key: str) -> None:
        try:
            r = await self._client()
            await r.delete(key)
        except (RedisError, OSError) as e:
            logger.warning("lock.release.error key=%s err=%s", key, type(e).__name__)

    def hold(self, key: str, ttl_seconds: int) -> "LockGuard":
        return LockGuard(self, key, ttl_seconds)


class LockGuard:
    """
    Usage:
      async with locks.hold(key, ttl) as guard:
          if not guard.held:
              ...
    Releases exactly once on exit when held. A cancelled task leaves the
    lock in place; it expires after its TTL.
    """

    def __init__(self, locks: LockManager, key: str, ttl_seconds: int) -> None:
        self._locks = locks
        self.key = key
        self.ttl_seconds = ttl_seconds
        self.held = False
        self._released = False

    async def __aenter__(self) -> "LockGuard":
        self.held = await self._locks.acquire(self.key, self.ttl_seconds)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        if exc_type is not None and issubclass(exc_type, asyncio.CancelledError):
            if self.held and not self._released:
                logger.warning(
                    "lock.cancelled.left_to_expire key=%s ttl=%d",
                    self.key,
                    self.ttl_seconds,
                )
            return False
        await self.release()
        return False

    async def release(self) -> None:
        if not self.held or self._released:
            return
        self._released = True
        await self._locks.release(self.key)
