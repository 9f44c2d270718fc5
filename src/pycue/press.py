"""Press gestures: repeat-while-held and long press.

Both gestures are small state machines driven from the event loop. State is
only touched from loop callbacks, so no locking is involved.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from pycue._constants import RELEASE_EVENTS
from pycue.config import CueConfig, resolve_config
from pycue.dom import Event
from pycue.listeners import ListenerGroup, listen
from pycue.models import HoldPressOptions
from pycue.timing import Scheduler, TimerHandle, resolve_scheduler

_logger = logging.getLogger(__name__)


class HoldState(StrEnum):
    ACTIVE = "active"
    DESTROYED = "destroyed"


class HoldPress:
    """Handle returned by :func:`hold_press`."""

    def __init__(self, cb: Callable[[], Any], options: HoldPressOptions, loop: Scheduler | None) -> None:
        self._cb = cb
        self._options = options
        self._scheduler = resolve_scheduler(loop)
        self._state = HoldState.ACTIVE

    def _start(self) -> None:
        self._cb()
        self._scheduler.call_later(self._options.debounce, self._begin_repeat)

    def _begin_repeat(self) -> None:
        if self._state is HoldState.ACTIVE:
            self._repeat()

    def _repeat(self) -> None:
        self._cb()
        if self._state is HoldState.ACTIVE:
            self._scheduler.call_later(self._options.rate, self._repeat)

    @property
    def state(self) -> HoldState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is HoldState.ACTIVE

    def destroy(self) -> None:
        """Stop repeating.

        A repeat already scheduled still runs once; it just does not
        schedule another. Destroyed handles cannot be reactivated.
        """
        self._state = HoldState.DESTROYED


def hold_press(
    cb: Callable[[], Any],
    options: HoldPressOptions | None = None,
    *,
    loop: Scheduler | None = None,
    config: CueConfig | None = None,
    **timings: float,
) -> HoldPress:
    """Call *cb* now, then repeatedly while the returned handle is active.

    Parameters
    ----------
    cb : callable
        Invoked with no arguments.
    options : HoldPressOptions, optional
        Repeat timings. Keyword ``debounce=`` / ``rate=`` may be given
        instead. Missing timings come from ``config.hold_debounce`` and
        ``config.hold_rate``.
    loop : Scheduler, optional
        Timer source; defaults to the running asyncio loop.
    config : CueConfig, optional
        Defaults to :meth:`CueConfig.from_env`.
    """
    if options is None:
        cfg = resolve_config(config)
        base = {"debounce": cfg.hold_debounce, "rate": cfg.hold_rate}
        options = HoldPressOptions(**{**base, **timings})
    elif timings:
        options = HoldPressOptions(**{**options.model_dump(), **timings})
    if not callable(cb):
        raise TypeError(f"callback must be callable, got {cb!r}")
    handle = HoldPress(cb, options, loop)
    handle._start()
    return handle


class LongPressState(StrEnum):
    ARMED = "armed"
    LONG_FIRED = "long_fired"
    RELEASED = "released"


class LongPress(StateMachine):
    """Tracks one press from its originating event until release.

    ``on_press(True)`` runs if the press outlives the arm delay;
    ``on_release(long_pressed)`` runs exactly once when the press ends.
    """

    armed = State(value=LongPressState.ARMED, initial=True)
    long_fired = State(value=LongPressState.LONG_FIRED)
    released = State(value=LongPressState.RELEASED, final=True)

    fire = armed.to(long_fired)
    release = armed.to(released) | long_fired.to(released)

    def __init__(
        self,
        event: Event,
        on_press: Callable[[bool], Any],
        on_release: Callable[[bool], Any],
        *,
        delay: float,
        loop: Scheduler | None,
    ) -> None:
        self._press_cb = on_press
        self._release_cb = on_release
        self._long_pressed = False
        self._press_timer: TimerHandle | None = None
        self._release_listeners = ListenerGroup()
        super().__init__()

        event.prevent_default()
        self._press_timer = resolve_scheduler(loop).call_later(delay, self._on_timer)

        target = event.current_target
        if target is not None:
            for name in RELEASE_EVENTS:
                if target.supports(name):
                    self._release_listeners.add(listen(target, name, self._handle_release))

    @property
    def phase(self) -> LongPressState:
        return LongPressState(self.current_state_value)

    @property
    def long_pressed(self) -> bool:
        return self._long_pressed

    def on_enter_long_fired(self) -> None:
        self._press_timer = None
        self._long_pressed = True
        self._press_cb(True)

    def on_enter_released(self) -> None:
        timer, self._press_timer = self._press_timer, None
        if timer is not None:
            timer.cancel()
        self._release_listeners()

    def _on_timer(self) -> None:
        try:
            self.fire()
        except TransitionNotAllowed:
            _logger.debug("Long press timer ignored in phase=%s", self.phase.value)

    def _handle_release(self, event: Event) -> None:
        event.prevent_default()
        try:
            self.release()
        except TransitionNotAllowed:
            return
        self._release_cb(self._long_pressed)

    def cancel(self) -> None:
        """Abandon the press without calling either callback."""
        if self.phase is not LongPressState.RELEASED:
            self.release()


def long_press(
    event: Event,
    on_press: Callable[[bool], Any],
    on_release: Callable[[bool], Any],
    *,
    delay: float | None = None,
    loop: Scheduler | None = None,
    config: CueConfig | None = None,
) -> LongPress:
    """Start tracking a press that began with *event*.

    Release is detected through ``touchend``, ``touchcancel`` and
    ``mouseup`` on the event's current target, limited to the kinds that
    target supports. *delay* defaults to ``config.long_press_delay``.
    """
    if delay is None:
        delay = resolve_config(config).long_press_delay
    return LongPress(event, on_press, on_release, delay=delay, loop=loop)
