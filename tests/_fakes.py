"""Test doubles shared by the test suite."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Any

from pycue.dom import Event, ImageElement, MediaElement, Node


class FakeTimerHandle:
    def __init__(self, when: float, callback: Callable[..., object], args: tuple[Any, ...]) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """Virtual clock implementing the ``call_later`` scheduler protocol."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, FakeTimerHandle]] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback: Callable[..., object], *args: Any) -> FakeTimerHandle:
        handle = FakeTimerHandle(self.now + delay, callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every timer that falls due."""
        deadline = self.now + seconds
        while self._queue and self._queue[0][0] <= deadline:
            when, _, handle = heapq.heappop(self._queue)
            self.now = when
            if not handle.cancelled:
                handle.callback(*handle.args)
        self.now = deadline


class ScriptedMediaBackend:
    """Media backend that replays a fixed schedule of lifecycle events.

    Delays are seconds after ``load()``; ``None`` means the event never fires.
    """

    def __init__(
        self,
        *,
        suspend_after: float | None = 0.0,
        metadata_after: float | None = None,
        error_after: float | None = None,
        play_error: Exception | None = None,
        image_loads: bool = True,
    ) -> None:
        self.suspend_after = suspend_after
        self.metadata_after = metadata_after
        self.error_after = error_after
        self.play_error = play_error
        self.image_loads = image_loads
        self.loads = 0
        self.plays = 0

    def load(self, element: Node) -> None:
        self.loads += 1
        loop = asyncio.get_running_loop()
        if isinstance(element, ImageElement):
            name = "load" if self.image_loads else "error"
            loop.call_soon(element.dispatch_event, Event(name, bubbles=False))
            return
        schedule = (
            ("suspend", self.suspend_after),
            ("loadedmetadata", self.metadata_after),
            ("error", self.error_after),
        )
        for name, delay in schedule:
            if delay is not None:
                loop.call_later(delay, element.dispatch_event, Event(name, bubbles=False))

    async def play(self, element: MediaElement) -> None:
        self.plays += 1
        await asyncio.sleep(0)
        if self.play_error is not None:
            raise self.play_error
