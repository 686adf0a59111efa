# controller/controller_dependencies.py
import logging
import secrets
from functools import lru_cache
from fastapi import Header, Request, Response
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from redis.exceptions import RedisError
from config.settings import settings
from config.username import UsernameConfig
from model.account import AccountID
from repository.account_repository import AccountRepository, InMemoryAccountRepository
from repository.lock_repository import RedisLockManager
from repository.username_cache_repository import UsernameCacheRepository
from service.username_seeder import UsernameSeeder
from service.username_service import UsernameService
from util.enums import ErrorMessage
from util.errors import AppError

logger = logging.getLogger(__name__)

_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)


@lru_cache(maxsize=1)
def get_username_config() -> UsernameConfig:
    return UsernameConfig.from_settings(settings)


@lru_cache(maxsize=1)
def get_account_repository() -> AccountRepository:
    # Process-local stand-in for the real account store.
    return InMemoryAccountRepository(temp_prefix=get_username_config().temp_prefix)


def get_username_service() -> UsernameService:
    config = get_username_config()
    return UsernameService(
        config,
        UsernameCacheRepository(config),
        RedisLockManager(),
        get_account_repository(),
    )


def get_username_seeder() -> UsernameSeeder:
    config = get_username_config()
    return UsernameSeeder(
        config, UsernameCacheRepository(config), get_account_repository()
    )


async def rate_limit(request: Request, response: Response) -> None:
    # Limiter shares Redis with the username set; an outage must not block checks.
    if FastAPILimiter.redis is None:
        # Startup could not reach Redis, so the limiter was never initialised.
        logger.warning("ratelimit.skipped reason=not_initialized")
        return
    try:
        await _limiter(request, response)
    except RedisError as e:
        logger.warning("ratelimit.backend.error err=%s", type(e).__name__)


async def current_account_id(
    x_account_id: str = Header(..., alias="X-Account-Id", min_length=1),
) -> AccountID:
    # Set by the upstream auth layer once the session is verified.
    return x_account_id


async def require_admin(authorization: str | None = Header(default=None)) -> None:
    expected = settings.ADMIN_TOKEN
    scheme, _, token = (authorization or "").partition(" ")
    if (
        not expected
        or scheme.lower() != "bearer"
        or not secrets.compare_digest(token.encode(), expected.encode())
    ):
        raise AppError(
            ErrorMessage.UNAUTHORIZED.value.message,
            ErrorMessage.UNAUTHORIZED.value.http_status,
        )
