from __future__ import annotations

import pytest

from pycue.dom import Document, Event, KeyboardEvent, Node, Window
from pycue.exceptions import InvalidListenerError
from pycue.listeners import (
    breakpoint_listen,
    click_outside,
    compose,
    listen,
    on_window_resize,
    register_exits,
)


def _tree() -> tuple[Document, Node, Node, Node]:
    doc = Document()
    panel = doc.body.append_child(Node("div", id="panel"))
    inner = panel.append_child(Node("button"))
    elsewhere = doc.body.append_child(Node("div", id="other"))
    return doc, panel, inner, elsewhere


def test_listen_returns_idempotent_disposer() -> None:
    target = Node("div")
    seen: list[str] = []
    unlisten = listen(target, "click", lambda e: seen.append(e.type))

    target.dispatch_event(Event("click"))
    unlisten()
    unlisten()
    target.dispatch_event(Event("click"))

    assert seen == ["click"]
    assert target.listener_count() == 0
    assert not unlisten.active


def test_listen_fails_fast_on_invalid_arguments() -> None:
    with pytest.raises(InvalidListenerError):
        listen(object(), "click", lambda e: None)  # type: ignore[arg-type]
    with pytest.raises(InvalidListenerError):
        listen(Node("div"), "", lambda e: None)
    # Also a TypeError, so generic callers can catch it that way.
    with pytest.raises(TypeError):
        listen(Node("div"), "click", None)  # type: ignore[arg-type]


def test_listen_removes_capture_listener() -> None:
    target = Node("div")
    unlisten = listen(target, "click", lambda e: None, {"capture": True, "passive": True})
    assert target.listener_count("click") == 1

    unlisten()
    assert target.listener_count("click") == 0


def test_compose_disposes_all_once() -> None:
    target = Node("div")
    a = listen(target, "a", lambda e: None)
    b = listen(target, "b", lambda e: None)
    group = compose(a, None, b)

    # Disposing a member first must not break the group.
    a()
    group()
    group()

    assert target.listener_count() == 0
    assert len(group) == 0


def test_register_exits_filters_escape() -> None:
    doc = Document()
    calls: list[None] = []
    unlisten = register_exits(lambda: calls.append(None), doc)

    doc.dispatch_event(KeyboardEvent("keyup", key="Enter", key_code=13))
    doc.dispatch_event(KeyboardEvent("keyup", key="Escape"))
    doc.dispatch_event(KeyboardEvent("keyup", key_code=27))
    doc.dispatch_event(KeyboardEvent("keydown", key="Escape"))
    unlisten()
    doc.dispatch_event(KeyboardEvent("keyup", key="Escape"))

    assert len(calls) == 2


def test_click_outside_ignores_clicks_inside() -> None:
    _doc, panel, inner, elsewhere = _tree()
    calls: list[None] = []
    click_outside(panel, lambda: calls.append(None))

    inner.dispatch_event(Event("click"))
    panel.dispatch_event(Event("click"))
    assert calls == []

    elsewhere.dispatch_event(Event("click"))
    assert len(calls) == 1


def test_click_outside_escape_and_dispose() -> None:
    doc, panel, _inner, elsewhere = _tree()
    calls: list[None] = []
    unlisten = click_outside(panel, lambda: calls.append(None))

    doc.dispatch_event(KeyboardEvent("keyup", key="Escape"))
    assert len(calls) == 1

    unlisten()
    unlisten()
    elsewhere.dispatch_event(Event("click"))
    doc.dispatch_event(KeyboardEvent("keyup", key="Escape"))
    assert len(calls) == 1
    assert doc.listener_count() == 0


def test_click_outside_validator_replaces_containment() -> None:
    doc, panel, inner, elsewhere = _tree()
    calls: list[None] = []
    checked: list[tuple[Node, object]] = []

    def validator(el: Node, event: Event) -> bool:
        checked.append((el, event.target))
        return event.target is inner

    click_outside(panel, lambda: calls.append(None), validator)

    elsewhere.dispatch_event(Event("click"))
    inner.dispatch_event(Event("click"))
    doc.dispatch_event(KeyboardEvent("keyup", key="Escape"))

    assert checked == [(panel, elsewhere), (panel, inner)]
    assert len(calls) == 2


def test_click_outside_requires_a_document() -> None:
    with pytest.raises(InvalidListenerError):
        click_outside(Node("div"), lambda: None)


def test_on_window_resize_listens_passively_to_both_events() -> None:
    window = Window()
    seen: list[str] = []
    unlisten = on_window_resize(window, lambda e: seen.append(e.type))

    window.resize(800, 600)
    window.rotate()
    unlisten()
    window.resize(1024, 768)

    assert seen == ["resize", "orientationchange"]
    assert window.listener_count() == 0


def test_breakpoint_listen_reports_current_and_changes() -> None:
    window = Window()
    mql = window.match_media("(max-width: 600px)")
    seen: list[bool] = []

    unlisten = breakpoint_listen(window, "(max-width: 600px)", seen.append)
    mql.set_matches(True)
    mql.set_matches(True)
    mql.set_matches(False)
    unlisten()
    mql.set_matches(True)

    assert seen == [False, True, False]
