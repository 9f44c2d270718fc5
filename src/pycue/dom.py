"""In-process model of the browser-like host.

The composition primitives only need a small slice of a DOM: event targets
with listener registration and dispatch, a node tree that can answer
``contains``, a document to look elements up in, and media/image elements
whose loading is driven by a pluggable backend. This module provides exactly
that slice so the primitives can run (and be tested) without a browser.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from pycue._constants import ESCAPE_KEY, ESCAPE_KEY_CODE
from pycue.exceptions import InvalidListenerError, PlaybackDeniedError

_logger = logging.getLogger(__name__)

Handler = Callable[["Event"], Any]


# ------------------------------------------------------------------
# Events
# ------------------------------------------------------------------


@dataclass(eq=False)
class Event:
    """A dispatched event.

    ``current_target`` is set while the event travels through listeners and
    reset to ``None`` once dispatch finishes, as in the DOM.
    """

    type: str
    target: EventTarget | None = None
    current_target: EventTarget | None = None
    bubbles: bool = True
    cancelable: bool = True
    detail: Any = None
    default_prevented: bool = field(default=False, init=False)
    propagation_stopped: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        if self.cancelable:
            self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass(eq=False)
class KeyboardEvent(Event):
    key: str = ""
    key_code: int = 0

    @property
    def is_escape(self) -> bool:
        return self.key == ESCAPE_KEY or self.key_code == ESCAPE_KEY_CODE


@dataclass(eq=False)
class MediaQueryListEvent(Event):
    matches: bool = False
    media: str = ""


# ------------------------------------------------------------------
# Event targets
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ListenerOptions:
    capture: bool = False
    passive: bool = False
    once: bool = False

    @classmethod
    def coerce(cls, options: bool | Mapping[str, Any] | ListenerOptions | None) -> ListenerOptions:
        """Normalize the ``options`` argument accepted by ``add_event_listener``."""
        if options is None:
            return cls()
        if isinstance(options, ListenerOptions):
            return options
        if isinstance(options, bool):
            return cls(capture=options)
        if isinstance(options, Mapping):
            unknown = set(options) - {"capture", "passive", "once"}
            if unknown:
                raise InvalidListenerError(f"Unknown listener options: {sorted(unknown)}")
            return cls(
                capture=bool(options.get("capture", False)),
                passive=bool(options.get("passive", False)),
                once=bool(options.get("once", False)),
            )
        raise InvalidListenerError(f"Unsupported listener options: {options!r}")


@dataclass(eq=False, slots=True)
class _Listener:
    handler: Handler
    options: ListenerOptions
    removed: bool = False


class EventTarget:
    """Listener registry with DOM-like dispatch semantics.

    Parameters
    ----------
    supported_events : iterable of str, optional
        Restricts which event kinds this target can deliver. ``None`` (the
        default) means every kind is supported.
    """

    def __init__(self, *, supported_events: Iterable[str] | None = None) -> None:
        self._listeners: dict[str, list[_Listener]] = {}
        self._supported = frozenset(supported_events) if supported_events is not None else None

    def supports(self, event_name: str) -> bool:
        return self._supported is None or event_name in self._supported

    def listener_count(self, event_name: str | None = None) -> int:
        if event_name is not None:
            return len(self._listeners.get(event_name, ()))
        return sum(len(entries) for entries in self._listeners.values())

    def add_event_listener(
        self,
        event_name: str,
        handler: Handler,
        options: bool | Mapping[str, Any] | ListenerOptions | None = None,
    ) -> None:
        if not callable(handler):
            raise InvalidListenerError(
                f"Handler for {event_name!r} is not callable: {handler!r}",
                target=self,
                event_name=event_name,
            )
        opts = ListenerOptions.coerce(options)
        entries = self._listeners.setdefault(event_name, [])
        for entry in entries:
            # Same handler + capture flag is a duplicate and is ignored.
            if entry.handler == handler and entry.options.capture == opts.capture:
                return
        entries.append(_Listener(handler=handler, options=opts))

    def remove_event_listener(
        self,
        event_name: str,
        handler: Handler,
        options: bool | Mapping[str, Any] | ListenerOptions | None = None,
    ) -> None:
        capture = ListenerOptions.coerce(options).capture
        entries = self._listeners.get(event_name)
        if not entries:
            return
        for entry in entries:
            if entry.handler == handler and entry.options.capture == capture:
                self._detach(event_name, entry)
                return

    def _detach(self, event_name: str, entry: _Listener) -> None:
        entry.removed = True
        entries = self._listeners.get(event_name)
        if entries is None:
            return
        remaining = [cand for cand in entries if cand is not entry]
        if remaining:
            self._listeners[event_name] = remaining
        else:
            self._listeners.pop(event_name, None)

    def _propagation_path(self) -> list[EventTarget]:
        return [self]

    def _invoke(self, event: Event) -> None:
        # Snapshot so listeners added during dispatch wait for the next event.
        for entry in list(self._listeners.get(event.type, ())):
            if entry.removed:
                continue
            if entry.options.once:
                self._detach(event.type, entry)
            entry.handler(event)

    def dispatch_event(self, event: Event) -> bool:
        """Deliver *event* to this target and, if it bubbles, its ancestors.

        Returns ``False`` when a listener called ``prevent_default()``.
        """
        if event.target is None:
            event.target = self
        path = self._propagation_path()
        if not event.bubbles:
            path = path[:1]
        try:
            for node in path:
                event.current_target = node
                node._invoke(event)
                if event.propagation_stopped:
                    break
        finally:
            event.current_target = None
        return not event.default_prevented


# ------------------------------------------------------------------
# Node tree
# ------------------------------------------------------------------


class Node(EventTarget):
    """Element-like node with a parent/children tree."""

    def __init__(
        self,
        tag: str,
        *,
        id: str | None = None,  # noqa: A002
        supported_events: Iterable[str] | None = None,
    ) -> None:
        super().__init__(supported_events=supported_events)
        self.tag = tag.lower()
        self.id = id
        self.style: dict[str, str] = {}
        self.attributes: dict[str, str] = {}
        self.parent: Node | None = None
        self.children: list[Node] = []

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<{type(self).__name__} {self.tag}{ident}>"

    def append_child(self, child: Node) -> Node:
        if child is self or child.contains(self):
            raise ValueError("Cannot append a node to itself or to one of its descendants")
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child: Node) -> Node:
        if child.parent is not self:
            raise ValueError(f"{child!r} is not a child of {self!r}")
        self.children.remove(child)
        child.parent = None
        return child

    def contains(self, other: object) -> bool:
        """Inclusive descendant test: a node contains itself."""
        node = other if isinstance(other, Node) else None
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def iter_descendants(self) -> Iterator[Node]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    @property
    def owner_document(self) -> Document | None:
        node: Node | None = self
        while node is not None:
            if isinstance(node, Document):
                return node
            node = node.parent
        return None

    def _propagation_path(self) -> list[EventTarget]:
        path: list[EventTarget] = []
        node: Node | None = self
        while node is not None:
            path.append(node)
            node = node.parent
        return path


class MediaBackend(Protocol):
    """Host media capability driving element loading and playback.

    ``load`` starts loading and is expected to dispatch lifecycle events
    (``suspend``, ``loadedmetadata``, ``load``, ``error``) on the element,
    synchronously or later on the event loop. ``play`` resolves when playback
    starts and raises when the host refuses it.
    """

    def load(self, element: Node) -> None:
        ...

    async def play(self, element: MediaElement) -> None:
        ...


@dataclass(frozen=True, slots=True)
class Source:
    src: str
    type: str = ""


class MediaElement(Node):
    """A playable ``video``/``audio`` element."""

    def __init__(
        self,
        tag: str = "video",
        *,
        id: str | None = None,  # noqa: A002
        backend: MediaBackend | None = None,
        supported_events: Iterable[str] | None = None,
    ) -> None:
        super().__init__(tag, id=id, supported_events=supported_events)
        self.backend = backend
        self.muted = False
        self.loop = False
        self.plays_inline = False
        self.autoplay = False
        self.paused = True
        self.sources: list[Source] = []
        self.load_count = 0

    def load(self) -> None:
        self.load_count += 1
        if self.backend is not None:
            self.backend.load(self)

    async def play(self) -> None:
        if self.backend is None:
            raise PlaybackDeniedError("No media backend available")
        await self.backend.play(self)
        self.paused = False

    def pause(self) -> None:
        self.paused = True


class ImageElement(Node):
    """An ``img`` element; assigning ``src`` starts loading."""

    def __init__(
        self,
        *,
        id: str | None = None,  # noqa: A002
        backend: MediaBackend | None = None,
    ) -> None:
        super().__init__("img", id=id)
        self.backend = backend
        self._src = ""

    @property
    def src(self) -> str:
        return self._src

    @src.setter
    def src(self, value: str) -> None:
        self._src = value
        if self.backend is not None:
            self.backend.load(self)


class Document(Node):
    """Root of a node tree with element lookup and creation."""

    def __init__(self, *, media_backend: MediaBackend | None = None) -> None:
        super().__init__("#document")
        self.media_backend = media_backend
        self.body = self.append_child(Node("body"))

    def create_element(self, tag: str) -> Node:
        name = tag.lower()
        if name in {"video", "audio"}:
            return MediaElement(name, backend=self.media_backend)
        if name == "img":
            return ImageElement(backend=self.media_backend)
        return Node(name)

    def get_element_by_id(self, element_id: str) -> Node | None:
        for node in self.iter_descendants():
            if node.id == element_id:
                return node
        return None


# ------------------------------------------------------------------
# Window
# ------------------------------------------------------------------


class MediaQueryList(EventTarget):
    """Result of :meth:`Window.match_media`; fires ``change`` on flips."""

    def __init__(self, media: str, *, matches: bool = False) -> None:
        super().__init__()
        self.media = media
        self.matches = matches

    def set_matches(self, matches: bool) -> None:
        if matches == self.matches:
            return
        self.matches = matches
        self.dispatch_event(MediaQueryListEvent("change", bubbles=False, matches=matches, media=self.media))


class Window(EventTarget):
    """Top-level target for viewport events."""

    def __init__(
        self,
        document: Document | None = None,
        *,
        inner_width: int = 1024,
        inner_height: int = 768,
    ) -> None:
        super().__init__()
        self.document = document if document is not None else Document()
        self.inner_width = inner_width
        self.inner_height = inner_height
        self._media_queries: dict[str, MediaQueryList] = {}

    def match_media(self, query: str) -> MediaQueryList:
        mql = self._media_queries.get(query)
        if mql is None:
            mql = MediaQueryList(query)
            self._media_queries[query] = mql
        return mql

    def resize(self, width: int, height: int) -> None:
        self.inner_width = width
        self.inner_height = height
        _logger.debug("Window resized to %sx%s", width, height)
        self.dispatch_event(Event("resize", bubbles=False, cancelable=False))

    def rotate(self) -> None:
        self.inner_width, self.inner_height = self.inner_height, self.inner_width
        self.dispatch_event(Event("orientationchange", bubbles=False, cancelable=False))
