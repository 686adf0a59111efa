# core/username_validator.py
import re
from config.username import UsernameConfig
from util.errors import InvalidFormatError

_ALLOWED = re.compile(r"[A-Za-z0-9_-]+")


def normalize_username(raw: str) -> str:
    return (raw or "").strip().lower()


def validate_username(username: str, config: UsernameConfig) -> None:
    """
    Raise InvalidFormatError unless `username` passes length, charset and
    reserved-word rules. Pure; expects an already-normalized name.
    """
    if not config.min_length <= len(username) <= config.max_length:
        raise InvalidFormatError(
            f"username must be {config.min_length}-{config.max_length} characters"
        )

    if not _ALLOWED.fullmatch(username):
        raise InvalidFormatError(
            "username can only contain letters, numbers, underscores, and hyphens"
        )

    if username.lower() in config.reserved:
        raise InvalidFormatError("this username is reserved")

    # A claimed "temp_..." handle would still read as unclaimed.
    if config.temp_prefix and username.lower().startswith(config.temp_prefix.lower()):
        raise InvalidFormatError("this username is reserved")
