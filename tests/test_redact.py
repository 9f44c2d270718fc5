from __future__ import annotations

from pycue._constants import PROBE_SOURCE
from pycue._redact import redact_for_log


def test_data_urls_are_summarized() -> None:
    redacted = redact_for_log(PROBE_SOURCE)
    assert redacted.startswith("data:video/mp4;base64,<")
    assert redacted.endswith(" chars>")
    assert len(redacted) < 64


def test_long_strings_are_truncated() -> None:
    redacted = redact_for_log("x" * 300, max_string=10)
    assert redacted == "x" * 10 + "…<truncated>"


def test_short_strings_and_bytes() -> None:
    assert redact_for_log("https://example.test/a.png") == "https://example.test/a.png"
    assert redact_for_log("data:no-comma") == "data:no-comma"
    assert redact_for_log(b"1234") == "<bytes:4b>"
