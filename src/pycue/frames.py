"""Rendering-frame scheduling and per-frame coalescing."""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pycue._constants import DEFAULT_FRAME_INTERVAL
from pycue.config import CueConfig, resolve_config
from pycue.timing import Scheduler, TimerHandle, resolve_scheduler

_logger = logging.getLogger(__name__)

FrameCallback = Callable[[], Any]


class FrameScheduler:
    """Batches callbacks onto periodic frame boundaries.

    Every callback requested before a boundary runs at that boundary, in
    request order. Callbacks requested while a frame is being flushed run on
    the following frame. No timer is armed while the queue is empty.
    """

    def __init__(self, loop: Scheduler | None = None, *, interval: float = DEFAULT_FRAME_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._loop = loop
        self._interval = interval
        self._queue: dict[int, FrameCallback] = {}
        self._next_handle = 0
        self._boundary: TimerHandle | None = None
        self.frame_count = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def pending(self) -> int:
        return len(self._queue)

    def request_frame(self, callback: FrameCallback) -> int:
        """Queue *callback* for the next frame and return a cancellable handle."""
        self._next_handle += 1
        handle = self._next_handle
        self._queue[handle] = callback
        if self._boundary is None:
            self._boundary = resolve_scheduler(self._loop).call_later(self._interval, self.flush)
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._queue.pop(handle, None)

    def flush(self) -> int:
        """Run the current frame now. Returns how many callbacks ran."""
        boundary = self._boundary
        self._boundary = None
        if boundary is not None:
            boundary.cancel()

        batch, self._queue = self._queue, {}
        self.frame_count += 1
        for callback in batch.values():
            try:
                callback()
            except Exception:
                _logger.exception("Frame callback failed frame=%s", self.frame_count)
        return len(batch)


_DEFAULT_SCHEDULERS: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, FrameScheduler] = (
    weakref.WeakKeyDictionary()
)


def get_frame_scheduler(config: CueConfig | None = None) -> FrameScheduler:
    """Return the frame scheduler bound to the running event loop.

    The scheduler is created on first use with ``config.frame_interval``;
    later calls return it unchanged.
    """
    loop = asyncio.get_running_loop()
    frames = _DEFAULT_SCHEDULERS.get(loop)
    if frames is None:
        frames = FrameScheduler(loop, interval=resolve_config(config).frame_interval)
        _DEFAULT_SCHEDULERS[loop] = frames
    return frames


class FrameState(StrEnum):
    IDLE = "idle"
    SCHEDULED = "scheduled"


class FrameCoalescer:
    """Collapses calls into at most one *cb* invocation per frame.

    The payload of the call that opened the window is the one delivered;
    payloads of later calls in the same window are discarded, not merged.
    Callers needing the latest value should track it themselves and read it
    inside *cb*.
    """

    def __init__(self, cb: Callable[[Any], Any], frames: FrameScheduler | None = None) -> None:
        if not callable(cb):
            raise TypeError(f"callback must be callable, got {cb!r}")
        self._cb = cb
        self._frames = frames
        self._state = FrameState.IDLE
        self._payload: Any = None

    @property
    def state(self) -> FrameState:
        return self._state

    @property
    def scheduled(self) -> bool:
        return self._state is FrameState.SCHEDULED

    def __call__(self, payload: Any = None) -> None:
        if self._state is FrameState.SCHEDULED:
            return
        self._state = FrameState.SCHEDULED
        self._payload = payload
        frames = self._frames if self._frames is not None else get_frame_scheduler()
        frames.request_frame(self._run)

    def _run(self) -> None:
        payload, self._payload = self._payload, None
        try:
            self._cb(payload)
        finally:
            self._state = FrameState.IDLE


def tick_update(cb: Callable[[Any], Any], frames: FrameScheduler | None = None) -> FrameCoalescer:
    """Wrap *cb* so it runs at most once per rendering frame."""
    return FrameCoalescer(cb, frames)


coalesce = tick_update


async def next_frame(frames: FrameScheduler | None = None) -> None:
    """Wait for the next frame boundary."""
    scheduler = frames if frames is not None else get_frame_scheduler()
    future: asyncio.Future[None] = asyncio.get_running_loop().create_future()

    def resolve() -> None:
        if not future.done():
            future.set_result(None)

    handle = scheduler.request_frame(resolve)
    try:
        await future
    finally:
        scheduler.cancel_frame(handle)


async def double_frame(frames: FrameScheduler | None = None) -> None:
    """Wait for two frame boundaries, so a frame has been fully rendered."""
    await next_frame(frames)
    await next_frame(frames)
