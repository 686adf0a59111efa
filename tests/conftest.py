from __future__ import annotations

import os

# Settings are read at import time; give them a complete environment first.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("REDIS_URL", "redis://127.0.0.1:6379/15")
os.environ.setdefault("ADMIN_TOKEN", "test-admin-token")

import pytest  # noqa: E402

from config.username import UsernameConfig  # noqa: E402
from repository.account_repository import InMemoryAccountRepository  # noqa: E402
from repository.lock_repository import RedisLockManager  # noqa: E402
from repository.username_cache_repository import UsernameCacheRepository  # noqa: E402
from service.username_seeder import UsernameSeeder  # noqa: E402
from service.username_service import UsernameService  # noqa: E402
from tests.fakes import BrokenRedis, FakeRedis  # noqa: E402


@pytest.fixture
def config() -> UsernameConfig:
    return UsernameConfig(seed_batch_size=2)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def broken_redis() -> BrokenRedis:
    return BrokenRedis()


@pytest.fixture
def accounts(config: UsernameConfig) -> InMemoryAccountRepository:
    return InMemoryAccountRepository(temp_prefix=config.temp_prefix)


@pytest.fixture
def cache(config: UsernameConfig, fake_redis: FakeRedis) -> UsernameCacheRepository:
    return UsernameCacheRepository(config, client=fake_redis.client)


@pytest.fixture
def locks(fake_redis: FakeRedis) -> RedisLockManager:
    return RedisLockManager(client=fake_redis.client)


@pytest.fixture
def service(config, cache, locks, accounts) -> UsernameService:
    return UsernameService(config, cache, locks, accounts)


@pytest.fixture
def seeder(config, cache, accounts) -> UsernameSeeder:
    return UsernameSeeder(config, cache, accounts)
