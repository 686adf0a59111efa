from __future__ import annotations

import asyncio
from typing import Dict, Optional, Set, Tuple

from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    """In-process stand-in for the handful of Redis commands the app uses.

    Every command yields to the loop once so concurrent callers interleave.
    Expiry follows a manual clock: call advance(seconds) to move time forward.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.sets: Dict[str, Set[str]] = {}
        self.strings: Dict[str, Tuple[str, Optional[float]]] = {}
        self.commands: list[str] = []

    async def client(self) -> "FakeRedis":
        return self

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _purge(self, key: str) -> None:
        entry = self.strings.get(key)
        if entry is not None and entry[1] is not None and entry[1] <= self.now:
            del self.strings[key]

    async def sismember(self, key: str, member: str) -> int:
        self.commands.append("sismember")
        await asyncio.sleep(0)
        return int(member in self.sets.get(key, set()))

    async def sadd(self, key: str, *members: str) -> int:
        self.commands.append("sadd")
        await asyncio.sleep(0)
        s = self.sets.setdefault(key, set())
        before = len(s)
        s.update(members)
        return len(s) - before

    async def scard(self, key: str) -> int:
        self.commands.append("scard")
        await asyncio.sleep(0)
        return len(self.sets.get(key, set()))

    async def delete(self, *keys: str) -> int:
        self.commands.append("delete")
        await asyncio.sleep(0)
        n = 0
        for k in keys:
            self._purge(k)
            n += int(self.sets.pop(k, None) is not None)
            n += int(self.strings.pop(k, None) is not None)
        return n

    async def set(
        self,
        key: str,
        value: str,
        nx: bool = False,
        ex: Optional[int] = None,
    ) -> Optional[bool]:
        self.commands.append("set")
        await asyncio.sleep(0)
        self._purge(key)
        if nx and key in self.strings:
            return None
        expires = self.now + ex if ex is not None else None
        self.strings[key] = (value, expires)
        return True

    async def get(self, key: str) -> Optional[str]:
        await asyncio.sleep(0)
        self._purge(key)
        entry = self.strings.get(key)
        return entry[0] if entry else None

    def has_key(self, key: str) -> bool:
        self._purge(key)
        return key in self.strings or key in self.sets

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        return None


class BrokenRedis:
    """Every command fails the way redis-py does when the server is gone."""

    def __init__(self) -> None:
        self.calls = 0

    async def client(self) -> "BrokenRedis":
        return self

    def __getattr__(self, name: str):
        async def _fail(*args, **kwargs):  # noqa: ARG001
            self.calls += 1
            raise RedisConnectionError("Connection refused")

        return _fail
