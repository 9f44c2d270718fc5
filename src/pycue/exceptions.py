"""Custom exception hierarchy for pycue."""

from __future__ import annotations

from typing import Any


class CueError(Exception):
    """Base exception for all pycue errors."""


class CueConfigError(CueError):
    """Invalid or missing configuration."""


class InvalidListenerError(CueError, TypeError):
    """A subscription was requested with an unusable target or handler.

    Raised synchronously at registration time; never deferred to delivery.
    """

    def __init__(self, message: str, *, target: Any = None, event_name: str = "") -> None:
        self.target = target
        self.event_name = event_name
        super().__init__(message)


class ProbeError(CueError):
    """A capability probe attempt failed.

    ``reason`` is the :class:`pycue.models.ProbeReason` value describing
    which branch of the race settled the attempt.
    """

    def __init__(self, message: str, *, reason: str = "") -> None:
        self.reason = reason
        super().__init__(message)


class PlaybackDeniedError(ProbeError):
    """The host refused to start media playback."""

    def __init__(self, message: str = "Playback denied") -> None:
        super().__init__(message, reason="playback_denied")


class ImageLoadError(CueError):
    """An image could not be loaded or fetched."""

    def __init__(
        self,
        message: str,
        *,
        src: str = "",
        status_code: int | None = None,
        aborted: bool = False,
    ) -> None:
        self.src = src
        self.status_code = status_code
        self.aborted = aborted
        super().__init__(message)


class TimerElapsedError(CueError):
    """Raised by :func:`pycue.timing.timer` when asked to fail on expiry."""

    def __init__(self, delay: float) -> None:
        self.delay = delay
        super().__init__(f"Timer elapsed after {delay}s")
