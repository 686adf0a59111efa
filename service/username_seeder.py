# service/username_seeder.py
import logging
from typing import Optional
from config.username import UsernameConfig
from repository.account_repository import AccountRepository
from repository.username_cache_repository import UsernameCacheRepository
from util.errors import CacheUnavailableError, SeedError
from util.timing import timed

logger = logging.getLogger(__name__)


class UsernameSeeder:
    """
    Keeps the username set in line with the account store.

    Flow:
    - seed_if_needed(): compare set cardinality with the store's permanent
      account count; reseed on any mismatch or when the set can't be read.
    - reseed(): clear, then stream handles from the store and SADD them in
      fixed-size batches. A failed batch stops the run; earlier batches stay,
      so re-running is safe.
    """

    def __init__(
        self,
        config: UsernameConfig,
        cache: UsernameCacheRepository,
        accounts: AccountRepository,
    ) -> None:
        self._batch_size = config.seed_batch_size
        self._cache = cache
        self._accounts = accounts

    async def seed_if_needed(self) -> bool:
        """Return True when a reseed ran."""
        cache_count: Optional[int]
        try:
            cache_count = await self._cache.count()
        except CacheUnavailableError as e:
            logger.error("username.seed.cache_count.error will_reseed=True err=%s", e)
            cache_count = None

        try:
            store_count = await self._accounts.count_permanent_accounts()
        except Exception:
            logger.error("username.seed.store_count.error")
            raise

        logger.info(
            "username.seed.status cache_count=%s store_count=%d",
            cache_count,
            store_count,
        )
        if cache_count == store_count:
            logger.info("username.seed.up_to_date")
            return False

        await self.reseed()
        return True

    async def reseed(self) -> int:
        """Rebuild the set from the store. Returns the number of handles added."""
        total = await self._accounts.count_permanent_accounts()
        total_batches = max(1, -(-total // self._batch_size))

        clear_error: Optional[CacheUnavailableError] = None
        with timed(logger, "username.reseed", store_count=total):
            try:
                await self._cache.clear()
            except CacheUnavailableError as e:
                # Batches below will fail loudly if the set is really gone.
                logger.warning("username.reseed.clear.error err=%s", e)
                clear_error = e

            added = 0
            batch_num = 0
            async for page in self._accounts.iter_handles(self._batch_size):
                if not page:
                    continue
                batch_num += 1
                try:
                    await self._cache.add_batch(page)
                except CacheUnavailableError as e:
                    logger.error(
                        "username.reseed.batch.error batch=%d total_batches=%d added=%d",
                        batch_num,
                        max(total_batches, batch_num),
                        added,
                    )
                    raise SeedError(batch_num, max(total_batches, batch_num), e) from e
                added += len(page)
                logger.debug(
                    "username.reseed.batch batch=%d total_batches=%d size=%d",
                    batch_num,
                    max(total_batches, batch_num),
                    len(page),
                )

        if added == 0:
            if clear_error is not None:
                # Nothing was written, so stale entries may still be there.
                raise clear_error
            logger.info("username.reseed.empty")
        else:
            logger.info("username.reseed.ok added=%d batches=%d", added, batch_num)
        return added

    async def clear_cache(self) -> None:
        await self._cache.clear()
        logger.info("username.cache.cleared")

    async def get_cache_count(self) -> int:
        return await self._cache.count()
