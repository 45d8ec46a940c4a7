"""Wait for the next animation frame.

Tests that assert on visual state after transitions await
:func:`wait_for_animation_frame`. The wait is a single one-shot
suspension: no cancellation and no timeout.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from pystoryfix.config import FixtureConfig
from pystoryfix.engine import FrameScheduler


class LoopFrameScheduler:
    """Frame scheduler driven by the running asyncio loop."""

    def __init__(self, interval: float | None = None) -> None:
        self.interval = FixtureConfig().frame_interval if interval is None else interval

    def request_animation_frame(self, callback: Callable[[], None]) -> None:
        asyncio.get_running_loop().call_later(self.interval, callback)


async def wait_for_animation_frame(scheduler: FrameScheduler | None = None) -> None:
    """Resolve once *scheduler* fires its next frame."""
    scheduler = scheduler or LoopFrameScheduler()
    future: asyncio.Future[None] = asyncio.get_running_loop().create_future()

    def _resolve(*_: object) -> None:
        if not future.done():
            future.set_result(None)

    scheduler.request_animation_frame(_resolve)
    await future
