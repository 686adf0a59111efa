# main.py
import asyncio
import logging
from fastapi_limiter import FastAPILimiter
from redis.exceptions import RedisError
import routes
from contextlib import asynccontextmanager
from util.enums import Color, Environment, ErrorMessage
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, get_redis
from controller.controller_dependencies import get_username_seeder
from fastapi.responses import JSONResponse
from util.errors import CacheUnavailableError, SeedError, UsernameError
from util.logger import init_logger

logger = logging.getLogger(__name__)


async def _real_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _log_seed_result(task: "asyncio.Task[bool]") -> None:
    if task.cancelled():
        logger.warning("username.seed.startup.cancelled")
        return
    exc = task.exception()
    if exc is not None:
        logger.error("username.seed.startup.error err=%s", exc)


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    init_logger()
    print(f"{Color.GREEN}Initializing...{Color.RESET}")
    redis = await get_redis()
    try:
        await redis.ping()
        await FastAPILimiter.init(redis, identifier=_real_ip)
    except (RedisError, OSError) as e:
        # Availability checks fall back to the account store while Redis is down.
        logger.warning("startup.redis.unavailable err=%s", e)

    seed_task = None
    if settings.USERNAME_SEED_ON_STARTUP:
        seed_task = asyncio.create_task(get_username_seeder().seed_if_needed())
        seed_task.add_done_callback(_log_seed_result)
    print(f"{Color.BLUE}Server Started{Color.RESET}")

    try:
        yield
    finally:
        if seed_task is not None and not seed_task.done():
            seed_task.cancel()
        try:
            await close_redis()
        except Exception as e:
            print("Error closing Redis:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=True,  # Allow cookies and other credentials
    allow_methods=["GET", "POST", "DELETE"],  # Allowed HTTP Methods
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "X-Account-Id",
    ],  # Allowed HTTP Headers
)


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.exception_handler(UsernameError)
async def username_error_handler(request: Request, exc: UsernameError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.kind.value, "message": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(CacheUnavailableError)
@app.exception_handler(SeedError)
async def cache_error_handler(request: Request, exc: Exception):
    logger.error("admin.cache.error path=%s err=%s", request.url.path, exc)
    return JSONResponse(
        status_code=ErrorMessage.INTERNAL_ERROR.value.http_status,
        content={"ok": False, "error": "cache_unavailable", "message": str(exc)},
    )


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    return JSONResponse(
        status_code=429,
        content={
            "ok": False,
            "error": "rate_limited",
            "message": "Too many requests. Try again in 60s.",
        },
        headers={"Retry-After": "60"},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=reload)
