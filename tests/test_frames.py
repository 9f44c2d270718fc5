from __future__ import annotations

import asyncio
import logging

import pytest
from _fakes import FakeLoop

from pycue.config import CueConfig
from pycue.frames import FrameScheduler, FrameState, double_frame, get_frame_scheduler, next_frame, tick_update

_FRAME = 0.01


def test_two_triggers_in_one_frame_deliver_first_payload_only(fake_loop: FakeLoop) -> None:
    frames = FrameScheduler(fake_loop, interval=_FRAME)
    seen: list[str] = []
    update = tick_update(seen.append, frames)

    update("first")
    update("second")
    assert update.scheduled

    fake_loop.advance(_FRAME)
    assert seen == ["first"]
    assert update.state is FrameState.IDLE

    update("third")
    fake_loop.advance(_FRAME)
    assert seen == ["first", "third"]


def test_scheduled_flag_clears_when_callback_raises(fake_loop: FakeLoop, caplog: pytest.LogCaptureFixture) -> None:
    frames = FrameScheduler(fake_loop, interval=_FRAME)

    def explode(_payload: object) -> None:
        raise RuntimeError("boom")

    update = tick_update(explode, frames)
    update(1)
    with caplog.at_level(logging.ERROR, logger="pycue.frames"):
        fake_loop.advance(_FRAME)

    assert not update.scheduled
    assert "Frame callback failed" in caplog.text


def test_callbacks_requested_during_flush_run_next_frame(fake_loop: FakeLoop) -> None:
    frames = FrameScheduler(fake_loop, interval=_FRAME)
    order: list[str] = []

    def outer() -> None:
        order.append("outer")
        frames.request_frame(lambda: order.append("inner"))

    frames.request_frame(outer)
    fake_loop.advance(_FRAME)
    assert order == ["outer"]
    assert frames.pending == 1

    fake_loop.advance(_FRAME)
    assert order == ["outer", "inner"]
    assert frames.frame_count == 2


def test_cancel_frame_and_idle_scheduler(fake_loop: FakeLoop) -> None:
    frames = FrameScheduler(fake_loop, interval=_FRAME)
    ran: list[int] = []

    handle = frames.request_frame(lambda: ran.append(1))
    frames.request_frame(lambda: ran.append(2))
    frames.cancel_frame(handle)
    fake_loop.advance(_FRAME)

    assert ran == [2]
    # Empty queue: no boundary timer stays armed.
    assert fake_loop.pending == 0


def test_frame_scheduler_rejects_non_positive_interval(fake_loop: FakeLoop) -> None:
    with pytest.raises(ValueError):
        FrameScheduler(fake_loop, interval=0)


@pytest.mark.asyncio
async def test_next_frame_and_double_frame() -> None:
    frames = FrameScheduler(interval=0.001)

    await asyncio.wait_for(next_frame(frames), timeout=1.0)
    assert frames.frame_count == 1

    await asyncio.wait_for(double_frame(frames), timeout=1.0)
    assert frames.frame_count == 3


@pytest.mark.asyncio
async def test_tick_update_uses_loop_default_scheduler() -> None:
    seen: list[int] = []
    update = tick_update(seen.append)

    update(1)
    update(2)
    await asyncio.sleep(0.1)

    assert seen == [1]


@pytest.mark.asyncio
async def test_default_scheduler_uses_configured_interval() -> None:
    frames = get_frame_scheduler(CueConfig(frame_interval=0.5))

    assert frames.interval == 0.5
    assert get_frame_scheduler() is frames
