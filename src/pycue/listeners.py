"""Listener lifecycle helpers.

Every registration returns a *disposer*: a zero-argument callable that
reverses it. Disposers are idempotent, so callers can release them on every
exit path without tracking whether they already ran.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pycue._constants import ESCAPE_KEY, ESCAPE_KEY_CODE, RESIZE_EVENTS
from pycue.dom import Event, EventTarget, ListenerOptions, Node, Window
from pycue.exceptions import InvalidListenerError

_logger = logging.getLogger(__name__)

Disposer = Callable[[], None]

_PASSIVE = ListenerOptions(passive=True)


@dataclass(eq=False, slots=True)
class Subscription:
    """A live registration of *handler* for *event_name* on *target*.

    Calling the subscription detaches the handler. Further calls are no-ops.
    """

    target: EventTarget
    event_name: str
    handler: Callable[[Event], Any]
    options: ListenerOptions = field(default_factory=ListenerOptions)
    active: bool = True

    def __call__(self) -> None:
        if not self.active:
            return
        self.active = False
        self.target.remove_event_listener(self.event_name, self.handler, self.options.capture)

    dispose = __call__


def listen(
    target: EventTarget,
    event_name: str,
    handler: Callable[[Event], Any],
    options: bool | Mapping[str, Any] | ListenerOptions | None = False,
) -> Subscription:
    """Attach *handler* and return a disposer that detaches it.

    Raises
    ------
    InvalidListenerError
        If *target* cannot hold listeners, *event_name* is empty, or
        *handler* is not callable.
    """
    if not callable(getattr(target, "add_event_listener", None)) or not callable(
        getattr(target, "remove_event_listener", None)
    ):
        raise InvalidListenerError(
            f"{target!r} is not an event target",
            target=target,
            event_name=event_name,
        )
    if not isinstance(event_name, str) or not event_name:
        raise InvalidListenerError(f"Invalid event name: {event_name!r}", target=target)
    if not callable(handler):
        raise InvalidListenerError(
            f"Handler for {event_name!r} is not callable: {handler!r}",
            target=target,
            event_name=event_name,
        )

    opts = ListenerOptions.coerce(options)
    target.add_event_listener(event_name, handler, opts)
    return Subscription(target=target, event_name=event_name, handler=handler, options=opts)


class ListenerGroup:
    """Composite disposer.

    Disposes its members in any order and at most once each; calling the
    group again, or after a member was disposed on its own, is a no-op.
    """

    def __init__(self, *disposers: Disposer | None) -> None:
        self._disposers: list[Disposer] = [d for d in disposers if d is not None]

    def __len__(self) -> int:
        return len(self._disposers)

    def add(self, disposer: Disposer) -> Disposer:
        self._disposers.append(disposer)
        return disposer

    def __call__(self) -> None:
        disposers, self._disposers = self._disposers, []
        for dispose in disposers:
            dispose()

    dispose = __call__


def compose(*disposers: Disposer | None) -> ListenerGroup:
    """Combine several disposers into one."""
    return ListenerGroup(*disposers)


def is_escape(event: Event) -> bool:
    key = getattr(event, "key", None)
    key_code = getattr(event, "key_code", None)
    return key == ESCAPE_KEY or key_code == ESCAPE_KEY_CODE


def register_exits(on_escape: Callable[[], Any], target: EventTarget) -> Subscription:
    """Call ``on_escape()`` whenever Escape is released on *target*."""

    def on_keyup(event: Event) -> None:
        if is_escape(event):
            on_escape()

    return listen(target, "keyup", on_keyup)


def click_outside(
    el: Node,
    on_outside: Callable[[], Any],
    validator: Callable[[Node, Event], bool] | None = None,
    *,
    document: EventTarget | None = None,
) -> ListenerGroup:
    """Call ``on_outside()`` for clicks outside *el* and for Escape.

    Parameters
    ----------
    el : Node
        The element interactions are measured against.
    on_outside : callable
        Invoked with no arguments.
    validator : callable, optional
        ``validator(el, event)`` replaces the default containment test for
        clicks. Escape always fires regardless.
    document : EventTarget, optional
        Target the document-level listeners attach to. Defaults to the
        document *el* belongs to.

    Raises
    ------
    InvalidListenerError
        If no document is given and *el* is not attached to one.
    """
    doc = document if document is not None else el.owner_document
    if doc is None:
        raise InvalidListenerError(f"{el!r} is not attached to a document", target=el, event_name="click")

    def on_click(event: Event) -> None:
        if validator is not None:
            if validator(el, event):
                on_outside()
        elif event.target is not None and event.target is not el and not el.contains(event.target):
            on_outside()

    unlisten = listen(doc, "click", on_click)
    unregister_exits = register_exits(on_outside, doc)
    return compose(unregister_exits, unlisten)


def on_window_resize(window: Window, cb: Callable[[Event], Any]) -> ListenerGroup:
    """Listen passively for both viewport resize and orientation changes."""
    return compose(*(listen(window, name, cb, _PASSIVE) for name in RESIZE_EVENTS))


def breakpoint_listen(window: Window, query: str, cb: Callable[[bool], Any]) -> Subscription:
    """Report the media query state now and on every change."""
    mql = window.match_media(query)

    def on_change(event: Event) -> None:
        cb(bool(getattr(event, "matches", mql.matches)))

    unlisten = listen(mql, "change", on_change)
    _logger.debug("Breakpoint listener registered query=%s matches=%s", query, mql.matches)
    cb(mql.matches)
    return unlisten
