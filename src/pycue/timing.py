"""Timer-gated callables: debounce and throttle.

Both gates own a single :class:`GateState` and therefore at most one live
timer handle. Calls suppressed by a gate are not errors: they are dropped
silently.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from pycue.config import CueConfig, resolve_config
from pycue.exceptions import TimerElapsedError


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay.

    :class:`asyncio.AbstractEventLoop` satisfies this protocol.
    """

    def call_later(self, delay: float, callback: Callable[..., object], *args: Any) -> TimerHandle:
        ...


def resolve_scheduler(loop: Scheduler | None) -> Scheduler:
    """Return *loop*, or the running asyncio loop when it is ``None``."""
    if loop is not None:
        return loop
    return asyncio.get_running_loop()


@dataclass(slots=True)
class GateState:
    handle: TimerHandle | None = None
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    def clear(self) -> None:
        self.handle = None
        self.args = ()
        self.kwargs = {}


class _TimerGate:
    def __init__(self, cb: Callable[..., Any], delay: float, loop: Scheduler | None) -> None:
        if not callable(cb):
            raise TypeError(f"callback must be callable, got {cb!r}")
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self._cb = cb
        self._delay = delay
        self._loop = loop
        self._state = GateState()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """Whether a timer is currently armed."""
        return self._state.handle is not None

    def cancel(self) -> None:
        """Disarm the pending timer, if any, without firing."""
        handle = self._state.handle
        self._state.clear()
        if handle is not None:
            handle.cancel()


class Debounced(_TimerGate):
    """Fires *delay* seconds after the latest call, with that call's arguments."""

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        previous = self._state.handle
        if previous is not None:
            previous.cancel()
        self._state.args = args
        self._state.kwargs = kwargs
        self._state.handle = resolve_scheduler(self._loop).call_later(self._delay, self._fire)

    def _fire(self) -> None:
        args, kwargs = self._state.args, self._state.kwargs
        self._state.clear()
        self._cb(*args, **kwargs)

    def flush(self) -> None:
        """Fire the pending call now instead of waiting for the timer."""
        handle = self._state.handle
        if handle is None:
            return
        handle.cancel()
        self._fire()


class Throttled(_TimerGate):
    """Fires once per window with the arguments of the call that opened it.

    The window closes when the first call arrives and reopens only after the
    callback has run; every call made in between is dropped.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        if self._state.handle is not None:
            return
        self._state.args = args
        self._state.kwargs = kwargs
        self._state.handle = resolve_scheduler(self._loop).call_later(self._delay, self._fire)

    def _fire(self) -> None:
        args, kwargs = self._state.args, self._state.kwargs
        try:
            self._cb(*args, **kwargs)
        finally:
            self._state.clear()


def debounce(
    cb: Callable[..., Any],
    delay: float | None = None,
    *,
    loop: Scheduler | None = None,
    config: CueConfig | None = None,
) -> Debounced:
    """Return a debounced version of *cb*.

    Only the last call of a burst shorter than *delay* runs. *delay*
    defaults to ``config.debounce_delay``.
    """
    if delay is None:
        delay = resolve_config(config).debounce_delay
    return Debounced(cb, delay, loop)


def throttle(
    cb: Callable[..., Any],
    delay: float | None = None,
    *,
    loop: Scheduler | None = None,
    config: CueConfig | None = None,
) -> Throttled:
    """Return a throttled version of *cb* that runs at most once per *delay*."""
    if delay is None:
        delay = resolve_config(config).throttle_delay
    return Throttled(cb, delay, loop)


async def timer(delay: float = 2.0, *, error: bool = False) -> None:
    """Sleep for *delay* seconds.

    Raises
    ------
    TimerElapsedError
        When *error* is true, once the delay has elapsed.
    """
    await asyncio.sleep(delay)
    if error:
        raise TimerElapsedError(delay)
