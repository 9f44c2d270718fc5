"""Typed option and result models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class HoldPressOptions(BaseModel):
    """Timings for :func:`pycue.press.hold_press`, in seconds."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    debounce: float = Field(default=0.15, ge=0)
    """Delay between the initial callback and the first repeat."""

    rate: float = Field(default=0.05, gt=0)
    """Interval between repeats while the press is held."""


class ProbeReason(StrEnum):
    """Which branch of the low power race decided the result."""

    PLAYBACK_ALLOWED = "playback_allowed"
    TIMEOUT = "timeout"
    LOAD_ERROR = "load_error"
    PLAYBACK_DENIED = "playback_denied"
    ABORTED = "aborted"


class ProbeResult(BaseModel):
    """Outcome of a capability probe attempt.

    ``restricted`` is ``False`` only when playback actually started; every
    other reason reports a restricted host.
    """

    model_config = ConfigDict(frozen=True)

    restricted: bool
    reason: ProbeReason
    detail: str | None = None
    element_id: str | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def _check_consistent(self) -> Self:
        expected = self.reason is not ProbeReason.PLAYBACK_ALLOWED
        if self.restricted != expected:
            raise ValueError(f"restricted={self.restricted} contradicts reason={self.reason.value}")
        return self

    @classmethod
    def from_reason(
        cls,
        reason: ProbeReason,
        *,
        detail: str | None = None,
        element_id: str | None = None,
    ) -> ProbeResult:
        return cls(
            restricted=reason is not ProbeReason.PLAYBACK_ALLOWED,
            reason=reason,
            detail=detail,
            element_id=element_id,
        )
