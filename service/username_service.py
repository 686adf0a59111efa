# service/username_service.py
import logging
from config.username import UsernameConfig
from core.username_validator import normalize_username, validate_username
from model.account import Account, AccountID
from repository.account_repository import AccountRepository
from repository.lock_repository import LockManager
from repository.username_cache_repository import UsernameCacheRepository
from util.errors import (
    AlreadySetError,
    AlreadyTakenError,
    CacheUnavailableError,
    HandleConflictError,
    InternalError,
    LockContentionError,
    LockUnavailableError,
    UsernameError,
)

logger = logging.getLogger(__name__)


class UsernameService:
    """
    Availability checks and one-way handle claims.

    The Redis set is a fast path that may lag; the account store's unique
    constraint on handle decides every race. The per-name lock only narrows
    the window so most losers get a clean LockContention/AlreadyTaken early.
    """

    def __init__(
        self,
        config: UsernameConfig,
        cache: UsernameCacheRepository,
        locks: LockManager,
        accounts: AccountRepository,
    ) -> None:
        self._config = config
        self._cache = cache
        self._locks = locks
        self._accounts = accounts

    async def check_availability(self, username: str) -> bool:
        username = normalize_username(username)
        validate_username(username, self._config)
        return await self._is_available(username)

    async def set_username(self, account_id: AccountID, username: str) -> Account:
        username = normalize_username(username)
        validate_username(username, self._config)

        acc = await self._get_account(account_id)
        if not acc.has_temporary_handle(self._config.temp_prefix):
            raise AlreadySetError()

        guard = self._locks.hold(
            self._config.lock_key(username), self._config.lock_ttl_seconds
        )
        try:
            async with guard:
                if not guard.held:
                    logger.info(
                        "username.claim.contended account=%s handle=%s",
                        account_id,
                        username,
                    )
                    raise LockContentionError()
                return await self._claim(account_id, username)
        except LockUnavailableError as e:
            if not self._config.lock_fail_open:
                logger.error("username.lock.unavailable handle=%s err=%s", username, e)
                raise InternalError() from e
            logger.warning(
                "username.lock.unavailable.proceeding handle=%s err=%s", username, e
            )
            return await self._claim(account_id, username)

    # ---------------- Internals ----------------

    async def _is_available(self, username: str) -> bool:
        try:
            if await self._cache.contains(username):
                return False
        except CacheUnavailableError as e:
            logger.warning("username.cache.unavailable op=contains err=%s", e)

        try:
            existing = await self._accounts.lookup_by_handle(username)
        except UsernameError:
            raise
        except Exception as e:
            logger.error("username.lookup.error handle=%s err=%s", username, e)
            raise InternalError() from e

        if existing is None:
            return True

        # Claimed in the store but missed by the cache: warm it for next time.
        await self._warm_cache(username, reason="drift")
        return False

    async def _claim(self, account_id: AccountID, username: str) -> Account:
        if not await self._is_available(username):
            raise AlreadyTakenError("This username was just taken. Please try another.")

        try:
            updated = await self._accounts.update_handle(account_id, username)
        except HandleConflictError as e:
            logger.info(
                "username.claim.conflict account=%s handle=%s", account_id, username
            )
            raise AlreadyTakenError() from e
        except UsernameError:
            raise
        except Exception as e:
            logger.error(
                "username.claim.write.error account=%s handle=%s err=%s",
                account_id,
                username,
                e,
            )
            raise InternalError() from e

        await self._warm_cache(username, reason="claimed")
        logger.info("username.claim.ok account=%s handle=%s", account_id, username)
        return updated

    async def _get_account(self, account_id: AccountID) -> Account:
        try:
            return await self._accounts.get_by_id(account_id)
        except UsernameError:
            raise
        except Exception as e:
            logger.error("username.account.get.error account=%s err=%s", account_id, e)
            raise InternalError() from e

    async def _warm_cache(self, username: str, *, reason: str) -> None:
        # Best-effort: log and drop, the store already has the answer.
        try:
            await self._cache.add(username)
        except CacheUnavailableError as e:
            logger.warning(
                "username.cache.add.skipped handle=%s reason=%s err=%s",
                username,
                reason,
                e,
            )
