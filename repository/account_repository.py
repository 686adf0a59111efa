# repository/account_repository.py
import asyncio
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, List, Optional, Protocol
from uuid import uuid4
from model.account import Account, AccountID
from util.errors import AccountNotFoundError, HandleConflictError


class AccountRepository(Protocol):
    """
    The authoritative account store as seen by the username flow.

    `update_handle` must enforce uniqueness of `handle` atomically and raise
    HandleConflictError when it is violated; that constraint is the only thing
    the claim flow relies on for correctness.
    """

    async def lookup_by_handle(self, handle: str) -> Optional[Account]: ...

    async def get_by_id(self, account_id: AccountID) -> Account: ...

    async def update_handle(self, account_id: AccountID, handle: str) -> Account: ...

    async def count_permanent_accounts(self) -> int: ...

    def iter_handles(self, page_size: int) -> AsyncIterator[List[str]]: ...


class InMemoryAccountRepository:
    """
    Single-process account store with a unique handle index.

    Backs the dev server and the tests. NOT shared across processes.
    """

    def __init__(self, temp_prefix: str = "temp_") -> None:
        self._temp_prefix = temp_prefix
        self._lock = asyncio.Lock()
        self._accounts: Dict[AccountID, Account] = {}
        self._by_handle: Dict[str, AccountID] = {}

    def _is_permanent(self, handle: str) -> bool:
        return not handle.startswith(self._temp_prefix)

    async def create(
        self, *, handle: Optional[str] = None, name: Optional[str] = None
    ) -> Account:
        handle = handle or f"{self._temp_prefix}{uuid4().hex[:12]}"
        async with self._lock:
            if handle in self._by_handle:
                raise HandleConflictError(handle)
            acc = Account(id=str(uuid4()), handle=handle, name=name)
            self._accounts[acc.id] = acc
            self._by_handle[handle] = acc.id
            return acc.model_copy()

    async def lookup_by_handle(self, handle: str) -> Optional[Account]:
        async with self._lock:
            account_id = self._by_handle.get(handle)
            if account_id is None:
                return None
            return self._accounts[account_id].model_copy()

    async def get_by_id(self, account_id: AccountID) -> Account:
        async with self._lock:
            acc = self._accounts.get(account_id)
            if acc is None:
                raise AccountNotFoundError()
            return acc.model_copy()

    async def update_handle(self, account_id: AccountID, handle: str) -> Account:
        async with self._lock:
            acc = self._accounts.get(account_id)
            if acc is None:
                raise AccountNotFoundError()
            owner = self._by_handle.get(handle)
            if owner is not None and owner != account_id:
                raise HandleConflictError(handle)
            self._by_handle.pop(acc.handle, None)
            updated = acc.model_copy(
                update={"handle": handle, "updatedAt": datetime.now(timezone.utc)}
            )
            self._accounts[account_id] = updated
            self._by_handle[handle] = account_id
            return updated.model_copy()

    async def count_permanent_accounts(self) -> int:
        async with self._lock:
            return sum(1 for h in self._by_handle if self._is_permanent(h))

    async def iter_handles(self, page_size: int) -> AsyncIterator[List[str]]:
        # Snapshot under the lock, then hand out pages without holding it.
        async with self._lock:
            handles = sorted(h for h in self._by_handle if self._is_permanent(h))
        for i in range(0, len(handles), page_size):
            yield handles[i : i + page_size]
