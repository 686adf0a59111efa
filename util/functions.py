# util/functions.py
import asyncio
from typing import Awaitable, TypeVar
from util.enums import ErrorMessage
from util.errors import AppError

T = TypeVar("T")


async def with_deadline(aw: Awaitable[T], seconds: float) -> T:
    """
    - Await `aw` for at most `seconds`; the inner task is cancelled on overrun.
    - Overrun surfaces as a 504 AppError.
    """
    try:
        return await asyncio.wait_for(aw, timeout=seconds)
    except asyncio.TimeoutError:
        raise AppError(
            ErrorMessage.TIMEOUT.value.message,
            ErrorMessage.TIMEOUT.value.http_status,
        )
