# repository/username_cache_repository.py
from typing import Iterable
from redis.exceptions import RedisError
from config.cache import RedisFactory, get_redis
from config.username import UsernameConfig
from util.errors import CacheUnavailableError


class UsernameCacheRepository:
    """
    Redis set mirroring every permanently claimed handle.

    Flow:
    - contains() True is authoritative ("taken"); False only means "not known".
    - Entries are added after a confirmed store write, or in bulk by the seeder.
    - Any backend failure surfaces as CacheUnavailableError so callers never
      mistake an outage for an empty set.
    """

    def __init__(
        self, config: UsernameConfig, client: RedisFactory = get_redis
    ) -> None:
        self._key = config.set_key
        self._client = client

    async def contains(self, username: str) -> bool:
        try:
            r = await self._client()
            return bool(await r.sismember(self._key, username))
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"sismember failed: {e}") from e

    async def add(self, username: str) -> None:
        await self.add_batch([username])

    async def add_batch(self, usernames: Iterable[str]) -> None:
        members = list(usernames)
        if not members:
            return
        try:
            r = await self._client()
            await r.sadd(self._key, *members)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"sadd failed: {e}") from e

    async def clear(self) -> None:
        try:
            r = await self._client()
            await r.delete(self._key)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"del failed: {e}") from e

    async def count(self) -> int:
        try:
            r = await self._client()
            return int(await r.scard(self._key) or 0)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"scard failed: {e}") from e
