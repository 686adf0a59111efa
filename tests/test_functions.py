from __future__ import annotations

import asyncio

import pytest

from util.errors import AppError
from util.functions import with_deadline


@pytest.mark.asyncio
async def test_with_deadline_returns_result() -> None:
    async def quick() -> int:
        return 7

    assert await with_deadline(quick(), 1.0) == 7


@pytest.mark.asyncio
async def test_with_deadline_cancels_and_maps_to_504() -> None:
    cancelled = asyncio.Event()

    async def slow() -> None:
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    with pytest.raises(AppError) as exc:
        await with_deadline(slow(), 0.01)
    assert exc.value.status_code == 504
    assert cancelled.is_set()
