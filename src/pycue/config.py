"""Library configuration for pycue."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pycue._constants import DEFAULT_FRAME_INTERVAL, PROBE_ELEMENT_ID
from pycue.exceptions import CueConfigError


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None:
        return None
    try:
        return float(value.strip())
    except ValueError as exc:
        raise CueConfigError(f"{key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class CueConfig:
    """Default timings used by the gating, gesture and probe primitives.

    Every value is in seconds.

    Parameters
    ----------
    debounce_delay : float
        Quiet period before a debounced callback fires.
    throttle_delay : float
        Window during which a throttled callback accepts no further calls.
    hold_debounce : float
        Delay between the initial hold-press callback and the repeat loop.
    hold_rate : float
        Interval between repeat-loop callbacks while a hold press is active.
    long_press_delay : float
        How long a press must last before it counts as a long press.
    probe_timeout : float
        How long the low power probe waits for metadata after the resource
        reports ``suspend`` before assuming playback is restricted.
    probe_deadline : float
        Upper bound on a whole probe load attempt, for hosts that never
        report ``suspend``, ``loadedmetadata`` or ``error``.
    probe_element_id : str
        Identifier of the shared probe media element.
    frame_interval : float
        Rendering frame period used by :class:`pycue.frames.FrameScheduler`.
    """

    debounce_delay: float = 1.0
    throttle_delay: float = 1.0
    hold_debounce: float = 0.15
    hold_rate: float = 0.05
    long_press_delay: float = 0.3
    probe_timeout: float = 0.5
    probe_deadline: float = 5.0
    probe_element_id: str = PROBE_ELEMENT_ID
    frame_interval: float = DEFAULT_FRAME_INTERVAL

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, float | int) and value < 0:
                raise CueConfigError(f"{f.name} must be non-negative, got {value}")
        if not self.probe_element_id.strip():
            raise CueConfigError("probe_element_id must be non-empty")
        if self.frame_interval <= 0:
            raise CueConfigError("frame_interval must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> CueConfig:
        """Create configuration from environment variables.

        Reads optional ``CUE_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        CueConfig
            Populated configuration.

        Raises
        ------
        CueConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "CUE_DEBOUNCE_DELAY": "debounce_delay",
            "CUE_THROTTLE_DELAY": "throttle_delay",
            "CUE_HOLD_DEBOUNCE": "hold_debounce",
            "CUE_HOLD_RATE": "hold_rate",
            "CUE_LONG_PRESS_DELAY": "long_press_delay",
            "CUE_PROBE_TIMEOUT": "probe_timeout",
            "CUE_PROBE_DEADLINE": "probe_deadline",
            "CUE_FRAME_INTERVAL": "frame_interval",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            if field_name in overrides:
                continue
            value = _env_float(env, env_key)
            if value is not None:
                config_kwargs[field_name] = value

        element_id = env.get("CUE_PROBE_ELEMENT_ID")
        if element_id is not None and "probe_element_id" not in overrides:
            config_kwargs["probe_element_id"] = element_id.strip()

        config_kwargs.update(overrides)

        return cls(**config_kwargs)


def resolve_config(config: CueConfig | None) -> CueConfig:
    """Return *config*, or one read from the ``CUE_*`` environment when ``None``."""
    return config if config is not None else CueConfig.from_env()
