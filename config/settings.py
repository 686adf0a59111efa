# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")
    REQUEST_TIMEOUT_SECONDS: float = Field(
        default=5.0, validation_alias="REQUEST_TIMEOUT_SECONDS"
    )
    ADMIN_TOKEN: str = Field(default="", validation_alias="ADMIN_TOKEN")

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(default=30, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Usernames
    USERNAME_SET_KEY: str = Field(
        default="usernames:set", validation_alias="USERNAME_SET_KEY"
    )
    USERNAME_LOCK_PREFIX: str = Field(
        default="username:lock:", validation_alias="USERNAME_LOCK_PREFIX"
    )
    USERNAME_LOCK_TTL_SECONDS: int = Field(
        default=10, validation_alias="USERNAME_LOCK_TTL_SECONDS"
    )
    USERNAME_LOCK_FAIL_OPEN: bool = Field(
        default=True, validation_alias="USERNAME_LOCK_FAIL_OPEN"
    )
    USERNAME_MIN_LENGTH: int = Field(default=3, validation_alias="USERNAME_MIN_LENGTH")
    USERNAME_MAX_LENGTH: int = Field(default=20, validation_alias="USERNAME_MAX_LENGTH")
    # Comma-separated; compared case-insensitively.
    USERNAME_RESERVED: str = Field(
        default="admin,root,system,moderator,traya,support,help,api,null,undefined,www",
        validation_alias="USERNAME_RESERVED",
    )
    USERNAME_TEMP_PREFIX: str = Field(
        default="temp_", validation_alias="USERNAME_TEMP_PREFIX"
    )
    USERNAME_SEED_BATCH_SIZE: int = Field(
        default=1000, validation_alias="USERNAME_SEED_BATCH_SIZE"
    )
    USERNAME_SEED_ON_STARTUP: bool = Field(
        default=True, validation_alias="USERNAME_SEED_ON_STARTUP"
    )

    # Logging knobs
    LOGGER_NAME: str = "handle-claim"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
