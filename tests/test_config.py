from __future__ import annotations

import pytest

from pycue.config import CueConfig, resolve_config
from pycue.exceptions import CueConfigError


def test_defaults() -> None:
    config = CueConfig()
    assert config.debounce_delay == 1.0
    assert config.hold_debounce == 0.15
    assert config.hold_rate == 0.05
    assert config.long_press_delay == 0.3
    assert config.probe_timeout == 0.5
    assert config.probe_element_id == "lowpower"


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CUE_DEBOUNCE_DELAY", " 0.25 ")
    monkeypatch.setenv("CUE_PROBE_TIMEOUT", "2")
    monkeypatch.setenv("CUE_PROBE_ELEMENT_ID", "probe-video")

    config = CueConfig.from_env()

    assert config.debounce_delay == 0.25
    assert config.probe_timeout == 2.0
    assert config.probe_element_id == "probe-video"
    assert config.throttle_delay == 1.0


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CUE_HOLD_RATE", "not-a-number")
    monkeypatch.setenv("CUE_PROBE_ELEMENT_ID", "ignored")

    config = CueConfig.from_env(hold_rate=0.1, probe_element_id="chosen")

    assert config.hold_rate == 0.1
    assert config.probe_element_id == "chosen"


def test_from_env_rejects_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CUE_LONG_PRESS_DELAY", "soon")
    with pytest.raises(CueConfigError, match="CUE_LONG_PRESS_DELAY"):
        CueConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"debounce_delay": -1},
        {"probe_timeout": -0.1},
        {"probe_element_id": "  "},
        {"frame_interval": 0},
    ],
)
def test_invalid_values_are_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(CueConfigError):
        CueConfig(**kwargs)  # type: ignore[arg-type]


def test_resolve_config_prefers_explicit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CUE_PROBE_DEADLINE", "3")
    explicit = CueConfig(probe_deadline=1.0)

    assert resolve_config(explicit) is explicit
    assert resolve_config(None).probe_deadline == 3.0
