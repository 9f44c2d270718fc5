"""Low power mode detection.

Some hosts run in a restricted power-saving mode where muted inline video is
not allowed to play. The probe infers that mode by loading a tiny clip and
racing its media lifecycle signals against a timeout:

1. ``suspend`` (fires once buffering stalls, on virtually every host) arms
   the timeout.
2. ``loadedmetadata`` cancels the timeout; playback is then attempted.
3. The timeout, a load ``error`` or a refused playback all report a
   restricted host.
4. An overall deadline, armed when loading starts, settles hosts that never
   report any of these signals as timed out.

Every ambiguous outcome is folded into ``restricted=True``; the probe never
raises, apart from propagating cancellation of the awaiting task.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from enum import StrEnum

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from pycue._constants import PROBE_SOURCE, PROBE_SOURCE_TYPE, PROBE_STYLE
from pycue._redact import redact_for_log
from pycue.config import CueConfig, resolve_config
from pycue.dom import Document, Event, MediaElement, Source
from pycue.exceptions import ProbeError
from pycue.listeners import Subscription, listen
from pycue.models import ProbeReason, ProbeResult

_logger = logging.getLogger(__name__)


class ProbeResource:
    """Handle on the shared probe media element.

    The element is created once per document, looked up by id on later
    calls, and never removed.
    """

    def __init__(self, element: MediaElement) -> None:
        self.element = element

    @property
    def element_id(self) -> str | None:
        return self.element.id

    @classmethod
    def ensure(
        cls,
        document: Document,
        *,
        element_id: str,
        source: str = PROBE_SOURCE,
    ) -> ProbeResource:
        """Look up the probe element by id, creating it when missing.

        Raises
        ------
        ProbeError
            If the id is taken by something that is not a media element.
        """
        existing = document.get_element_by_id(element_id)
        if existing is None:
            element = document.create_element("video")
            if not isinstance(element, MediaElement):
                raise ProbeError("Document cannot create media elements", reason=ProbeReason.LOAD_ERROR)
            element.id = element_id
            element.loop = True
            element.plays_inline = True
            element.muted = True
            # Autoplay stays off: playback must be requested explicitly.
            element.sources.append(Source(src=source, type=PROBE_SOURCE_TYPE))
            document.body.append_child(element)
            _logger.debug(
                "Created probe element id=%s source=%s",
                element_id,
                redact_for_log(source),
            )
        elif isinstance(existing, MediaElement):
            element = existing
        else:
            raise ProbeError(
                f"Element #{element_id} exists but is not a media element: {existing!r}",
                reason=ProbeReason.LOAD_ERROR,
            )

        element.style.update(PROBE_STYLE)
        return cls(element)


class ProbeState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SUSPENDED = "suspended"
    RESOLVED = "resolved"
    TIMED_OUT = "timed_out"
    LOAD_ERROR = "load_error"
    ABORTED = "aborted"


class ProbeSignal(StrEnum):
    """Inputs to :class:`LoadRace`; each value names one of its events."""

    LOAD = "load"
    SUSPEND = "suspend"
    METADATA = "metadata"
    TIMEOUT = "timeout"
    FAIL = "fail"
    ABORT = "abort"


_REASONS: dict[ProbeState, ProbeReason] = {
    ProbeState.TIMED_OUT: ProbeReason.TIMEOUT,
    ProbeState.LOAD_ERROR: ProbeReason.LOAD_ERROR,
    ProbeState.ABORTED: ProbeReason.ABORTED,
}


class LoadRace(StateMachine):
    """One loading attempt of the probe element.

    Settles in a final state. ``suspend`` arms the metadata *timeout*; the
    *deadline*, armed when loading starts, bounds hosts that stay silent.
    Subscriptions and timers are released as soon as a final state is
    entered, and again (as a no-op) when :meth:`run` exits for any reason.
    """

    idle = State(value=ProbeState.IDLE, initial=True)
    loading = State(value=ProbeState.LOADING)
    suspended = State(value=ProbeState.SUSPENDED)
    resolved = State(value=ProbeState.RESOLVED, final=True)
    timed_out = State(value=ProbeState.TIMED_OUT, final=True)
    load_error = State(value=ProbeState.LOAD_ERROR, final=True)
    aborted = State(value=ProbeState.ABORTED, final=True)

    load = idle.to(loading)
    suspend = loading.to(suspended)
    metadata = loading.to(resolved) | suspended.to(resolved)
    timeout = loading.to(timed_out) | suspended.to(timed_out)
    fail = loading.to(load_error) | suspended.to(load_error)
    abort = idle.to(aborted) | loading.to(aborted) | suspended.to(aborted)

    def __init__(
        self,
        element: MediaElement,
        *,
        timeout: float,
        deadline: float | None = None,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self._race_element = element
        self._race_timeout = timeout
        self._race_deadline = deadline
        self._race_loop = loop
        self._race_future: asyncio.Future[ProbeState] = loop.create_future()
        self._race_timers: list[asyncio.TimerHandle] = []
        self._suspend_sub: Subscription | None = None
        self._race_subscriptions: list[Subscription] = []
        super().__init__()

    @property
    def phase(self) -> ProbeState:
        return ProbeState(self.current_state_value)

    def signal(self, signal: ProbeSignal) -> bool:
        """Apply *signal*; returns ``False`` when the current phase ignores it."""
        try:
            self.send(signal.value)
        except TransitionNotAllowed:
            _logger.debug("Probe ignored signal=%s phase=%s", signal.value, self.phase.value)
            return False
        return True

    async def run(self) -> ProbeState:
        if self.phase is not ProbeState.IDLE:
            return self.phase
        element = self._race_element
        self._suspend_sub = listen(element, "suspend", self._on_suspend)
        self._race_subscriptions = [
            self._suspend_sub,
            listen(element, "loadedmetadata", self._on_metadata),
            listen(element, "error", self._on_error),
        ]
        self.signal(ProbeSignal.LOAD)
        try:
            element.load()
        except Exception:
            _logger.debug("Probe element load failed", exc_info=True)
            self.signal(ProbeSignal.FAIL)
        try:
            return await self._race_future
        finally:
            self._release()

    def on_enter_state(self, target: State) -> None:
        _logger.debug("Probe entered %s", target.value)
        if target.final:
            self._release()
            if not self._race_future.done():
                self._race_future.set_result(ProbeState(target.value))

    def on_enter_loading(self) -> None:
        if self._race_deadline is not None:
            self._arm(self._race_deadline)

    def on_enter_suspended(self) -> None:
        self._arm(self._race_timeout)

    def _arm(self, delay: float) -> None:
        self._race_timers.append(self._race_loop.call_later(delay, self.signal, ProbeSignal.TIMEOUT))

    def _on_suspend(self, _event: Event) -> None:
        if self._suspend_sub is not None:
            self._suspend_sub()
        self.signal(ProbeSignal.SUSPEND)

    def _on_metadata(self, _event: Event) -> None:
        self.signal(ProbeSignal.METADATA)

    def _on_error(self, _event: Event) -> None:
        self.signal(ProbeSignal.FAIL)

    def _release(self) -> None:
        timers, self._race_timers = self._race_timers, []
        for timer in timers:
            timer.cancel()
        for unlisten in self._race_subscriptions:
            unlisten()


_ATTEMPTS: weakref.WeakKeyDictionary[Document, asyncio.Task[ProbeResult]] = weakref.WeakKeyDictionary()


class CapabilityProbe:
    """Detects restricted playback for one document.

    Attempts are shared per document: concurrent callers of :meth:`detect`,
    through this probe or any other probe on the same document, join the
    outstanding attempt. A new attempt starts only once the previous one has
    settled.
    """

    def __init__(self, document: Document, config: CueConfig | None = None) -> None:
        self._document = document
        self._config = resolve_config(config)
        self._resource: ProbeResource | None = None
        self._last_result: ProbeResult | None = None

    @property
    def resource(self) -> ProbeResource | None:
        return self._resource

    @property
    def last_result(self) -> ProbeResult | None:
        return self._last_result

    @property
    def in_flight(self) -> bool:
        task = _ATTEMPTS.get(self._document)
        return task is not None and not task.done()

    async def detect(self, *, abort: asyncio.Event | None = None) -> ProbeResult:
        """Run (or join) a probe attempt and return its discriminated result.

        Parameters
        ----------
        abort : asyncio.Event, optional
            Setting it before the load race settles ends the attempt with
            :attr:`ProbeReason.ABORTED`. Only the caller that starts an
            attempt can abort it; joining callers' events are ignored.
        """
        task = _ATTEMPTS.get(self._document)
        if task is None or task.done():
            task = asyncio.get_running_loop().create_task(self._attempt(abort))
            _ATTEMPTS[self._document] = task
        else:
            _logger.debug("Joining in-flight probe attempt")
        result = await asyncio.shield(task)
        self._last_result = result
        return result

    async def is_low_power(self, *, abort: asyncio.Event | None = None) -> bool:
        """``True`` when the host appears to restrict media playback."""
        return (await self.detect(abort=abort)).restricted

    def _settle(self, reason: ProbeReason, *, detail: str | None = None) -> ProbeResult:
        element_id = self._resource.element_id if self._resource is not None else self._config.probe_element_id
        result = ProbeResult.from_reason(reason, detail=detail, element_id=element_id)
        _logger.debug("Probe settled reason=%s restricted=%s", reason.value, result.restricted)
        return result

    async def _attempt(self, abort: asyncio.Event | None) -> ProbeResult:
        try:
            resource = ProbeResource.ensure(self._document, element_id=self._config.probe_element_id)
        except ProbeError as exc:
            _logger.debug("Probe resource unavailable", exc_info=True)
            return self._settle(ProbeReason.LOAD_ERROR, detail=str(exc))
        self._resource = resource

        if abort is not None and abort.is_set():
            return self._settle(ProbeReason.ABORTED)

        loop = asyncio.get_running_loop()
        race = LoadRace(
            resource.element,
            timeout=self._config.probe_timeout,
            deadline=self._config.probe_deadline,
            loop=loop,
        )
        watcher: asyncio.Task[bool] | None = None
        if abort is not None:
            watcher = loop.create_task(abort.wait())
            watcher.add_done_callback(lambda t: None if t.cancelled() else race.signal(ProbeSignal.ABORT))
        try:
            outcome = await race.run()
        finally:
            if watcher is not None:
                watcher.cancel()

        if outcome is not ProbeState.RESOLVED:
            return self._settle(_REASONS[outcome])

        try:
            await resource.element.play()
        except Exception as exc:
            _logger.debug("Probe playback refused", exc_info=True)
            return self._settle(ProbeReason.PLAYBACK_DENIED, detail=str(exc) or type(exc).__name__)
        return self._settle(ProbeReason.PLAYBACK_ALLOWED)


_PROBES: weakref.WeakKeyDictionary[Document, CapabilityProbe] = weakref.WeakKeyDictionary()


def get_probe(document: Document, config: CueConfig | None = None) -> CapabilityProbe:
    """Return the probe shared by every caller for *document*.

    *config* only applies when the probe is created.
    """
    probe = _PROBES.get(document)
    if probe is None:
        probe = CapabilityProbe(document, config)
        _PROBES[document] = probe
    return probe


async def is_low_power(document: Document, *, config: CueConfig | None = None) -> bool:
    """Detect whether *document*'s host refuses muted inline playback."""
    return await get_probe(document, config).is_low_power()
