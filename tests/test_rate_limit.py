from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient
from fastapi_limiter import FastAPILimiter
from redis.exceptions import ConnectionError as RedisConnectionError

import controller.controller_dependencies as deps
from config.settings import settings
from controller.controller_dependencies import get_username_service
from main import app
from repository.lock_repository import RedisLockManager
from repository.username_cache_repository import UsernameCacheRepository
from service.username_service import UsernameService
from util.constants import InternalURIs
from util.logger import reset_logger


@pytest.fixture
def redis_down(monkeypatch, config, broken_redis, accounts):
    """App wired to a Redis that refuses every command, rate limiter left real."""
    monkeypatch.setattr("main.get_redis", broken_redis.client)
    monkeypatch.setattr(settings, "USERNAME_SEED_ON_STARTUP", False)
    monkeypatch.setattr(FastAPILimiter, "redis", None)
    svc = UsernameService(
        config,
        UsernameCacheRepository(config, client=broken_redis.client),
        RedisLockManager(client=broken_redis.client),
        accounts,
    )
    app.dependency_overrides[get_username_service] = lambda: svc
    try:
        yield
    finally:
        app.dependency_overrides.clear()
        reset_logger()


def test_endpoints_stay_up_when_redis_is_down_at_startup(redis_down, accounts) -> None:
    acc = asyncio.run(accounts.create())

    with TestClient(app) as client:
        resp = client.get(InternalURIs.USERNAME_CHECK, params={"username": "alice"})
        assert resp.status_code == 200
        assert resp.json() == {"available": True}

        resp = client.post(
            InternalURIs.USERNAME,
            json={"username": "alice"},
            headers={"X-Account-Id": acc.id},
        )
        assert resp.status_code == 200
        assert resp.json()["account"]["handle"] == "alice"

        resp = client.get(InternalURIs.USERNAME_CHECK, params={"username": "alice"})
        assert resp.json() == {"available": False}

    assert FastAPILimiter.redis is None


def test_limiter_backend_error_lets_request_through(redis_down, monkeypatch) -> None:
    calls = 0

    async def failing_limiter(request, response) -> None:
        nonlocal calls
        calls += 1
        raise RedisConnectionError("Connection reset by peer")

    monkeypatch.setattr(deps, "_limiter", failing_limiter)

    with TestClient(app) as client:
        # Pretend startup initialised the limiter before Redis went away.
        monkeypatch.setattr(FastAPILimiter, "redis", object())
        resp = client.get(InternalURIs.USERNAME_CHECK, params={"username": "alice"})

    assert resp.status_code == 200
    assert resp.json() == {"available": True}
    assert calls == 1
