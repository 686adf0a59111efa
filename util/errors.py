# util/errors.py
from typing import Dict, Optional
from fastapi import HTTPException, status
from util.enums import ErrorKind, ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self,
        message: str,
        http_status: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=http_status, detail=message, headers=headers)


class UsernameError(AppError):
    """
    Terminal, user-visible outcome of a username check or claim.

    `kind` is what callers branch on; `detail` is the human-readable reason.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    info: ErrorMessage = ErrorMessage.INTERNAL_ERROR

    def __init__(
        self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None
    ) -> None:
        super().__init__(
            message or self.info.value.message, self.info.value.http_status, headers
        )


class InvalidFormatError(UsernameError):
    kind = ErrorKind.INVALID_FORMAT
    info = ErrorMessage.INVALID_FORMAT


class AlreadySetError(UsernameError):
    kind = ErrorKind.ALREADY_SET
    info = ErrorMessage.ALREADY_SET


class LockContentionError(UsernameError):
    kind = ErrorKind.LOCK_CONTENTION
    info = ErrorMessage.LOCK_CONTENTION

    def __init__(self, message: Optional[str] = None, retry_after: int = 1) -> None:
        super().__init__(message, headers={"Retry-After": str(retry_after)})


class AlreadyTakenError(UsernameError):
    kind = ErrorKind.ALREADY_TAKEN
    info = ErrorMessage.ALREADY_TAKEN


class AccountNotFoundError(UsernameError):
    kind = ErrorKind.NOT_FOUND
    info = ErrorMessage.ACCOUNT_NOT_FOUND


class InternalError(UsernameError):
    kind = ErrorKind.INTERNAL
    info = ErrorMessage.INTERNAL_ERROR


# ---------------- Backend-level errors (never shown to users as-is) ----------------


class CacheUnavailableError(Exception):
    """The availability cache could not answer; not the same as 'absent'."""


class HandleConflictError(Exception):
    """The account store rejected a handle write on its uniqueness constraint."""

    def __init__(self, handle: str) -> None:
        super().__init__(f"handle already exists: {handle}")
        self.handle = handle


class SeedError(Exception):
    """A reseed stopped part-way; `batch`/`total` say how far it got."""

    def __init__(self, batch: int, total: int, cause: BaseException) -> None:
        super().__init__(f"failed to add batch {batch}/{total} to cache: {cause}")
        self.batch = batch
        self.total = total


class LockUnavailableError(Exception):
    """The lock backend could not be reached; ownership is unknown."""
