from __future__ import annotations

import pytest
from _fakes import FakeLoop


@pytest.fixture
def fake_loop() -> FakeLoop:
    return FakeLoop()
