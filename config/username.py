# config/username.py
from dataclasses import dataclass, field
from typing import FrozenSet
from config.settings import Settings
from repository.namespaces import USERNAME_LOCK_PREFIX, USERNAME_SET


DEFAULT_RESERVED: FrozenSet[str] = frozenset(
    {
        "admin",
        "root",
        "system",
        "moderator",
        "traya",
        "support",
        "help",
        "api",
        "null",
        "undefined",
        "www",
    }
)


@dataclass(frozen=True)
class UsernameConfig:
    """
    Everything the claim flow needs to know about keys and rules.

    Built once per process (or per test) and handed to the cache, lock,
    service and seeder constructors, so two instances never share state.
    """

    set_key: str = USERNAME_SET
    lock_prefix: str = USERNAME_LOCK_PREFIX
    lock_ttl_seconds: int = 10
    lock_fail_open: bool = True
    min_length: int = 3
    max_length: int = 20
    reserved: FrozenSet[str] = field(default_factory=lambda: DEFAULT_RESERVED)
    temp_prefix: str = "temp_"
    seed_batch_size: int = 1000

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "reserved", frozenset(w.lower() for w in self.reserved)
        )

    def lock_key(self, username: str) -> str:
        return f"{self.lock_prefix}{username}"

    @classmethod
    def from_settings(cls, s: Settings) -> "UsernameConfig":
        reserved = frozenset(
            w.strip().lower() for w in s.USERNAME_RESERVED.split(",") if w.strip()
        )
        return cls(
            set_key=s.USERNAME_SET_KEY,
            lock_prefix=s.USERNAME_LOCK_PREFIX,
            lock_ttl_seconds=s.USERNAME_LOCK_TTL_SECONDS,
            lock_fail_open=s.USERNAME_LOCK_FAIL_OPEN,
            min_length=s.USERNAME_MIN_LENGTH,
            max_length=s.USERNAME_MAX_LENGTH,
            reserved=reserved,
            temp_prefix=s.USERNAME_TEMP_PREFIX,
            seed_batch_size=max(1, s.USERNAME_SEED_BATCH_SIZE),
        )
