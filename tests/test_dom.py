from __future__ import annotations

import pytest

from pycue.dom import Document, Event, ImageElement, MediaElement, Node
from pycue.exceptions import InvalidListenerError, PlaybackDeniedError


def test_contains_is_inclusive() -> None:
    doc = Document()
    parent = doc.body.append_child(Node("div"))
    child = parent.append_child(Node("span"))

    assert parent.contains(parent)
    assert parent.contains(child)
    assert not child.contains(parent)
    assert not parent.contains("not a node")
    assert child.owner_document is doc


def test_append_child_rejects_cycles_and_reparents() -> None:
    a = Node("div")
    b = a.append_child(Node("div"))
    with pytest.raises(ValueError):
        b.append_child(a)

    c = Node("section")
    c.append_child(b)
    assert b.parent is c
    assert a.children == []


def test_once_and_duplicate_listeners() -> None:
    target = Node("div")
    calls: list[str] = []

    def handler(event: Event) -> None:
        calls.append(event.type)

    target.add_event_listener("click", handler)
    target.add_event_listener("click", handler)
    target.add_event_listener("ping", handler, {"once": True})

    target.dispatch_event(Event("click"))
    target.dispatch_event(Event("ping"))
    target.dispatch_event(Event("ping"))

    assert calls == ["click", "ping"]
    assert target.listener_count() == 1


def test_unknown_listener_option_is_rejected() -> None:
    with pytest.raises(InvalidListenerError):
        Node("div").add_event_listener("click", lambda e: None, {"passiv": True})


def test_bubbling_and_stop_propagation() -> None:
    doc = Document()
    outer = doc.body.append_child(Node("div"))
    inner = outer.append_child(Node("button"))
    seen: list[tuple[Node, object]] = []

    outer.add_event_listener("click", lambda e: seen.append((outer, e.current_target)))
    event = Event("click")
    inner.dispatch_event(event)

    assert seen == [(outer, outer)]
    assert event.target is inner
    assert event.current_target is None

    inner.add_event_listener("click", lambda e: e.stop_propagation())
    inner.dispatch_event(Event("click"))
    assert len(seen) == 1


def test_prevent_default_is_reported_by_dispatch() -> None:
    target = Node("a")
    target.add_event_listener("click", lambda e: e.prevent_default())

    assert target.dispatch_event(Event("click")) is False
    assert target.dispatch_event(Event("focus")) is True


def test_document_creates_and_finds_elements() -> None:
    doc = Document()
    video = doc.create_element("VIDEO")
    img = doc.create_element("img")
    video.id = "clip"
    doc.body.append_child(video)

    assert isinstance(video, MediaElement)
    assert isinstance(img, ImageElement)
    assert doc.get_element_by_id("clip") is video
    assert doc.get_element_by_id("missing") is None


@pytest.mark.asyncio
async def test_play_without_backend_is_denied() -> None:
    video = MediaElement()
    with pytest.raises(PlaybackDeniedError):
        await video.play()
    assert video.paused
