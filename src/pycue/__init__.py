"""pycue - Cancellable event and timer composition for asyncio hosts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycue")
except PackageNotFoundError:
    __version__ = "0+local"

from pycue.config import CueConfig, resolve_config
from pycue.dom import (
    Document,
    Event,
    EventTarget,
    ImageElement,
    KeyboardEvent,
    MediaBackend,
    MediaElement,
    MediaQueryList,
    Node,
    Source,
    Window,
)
from pycue.exceptions import (
    CueConfigError,
    CueError,
    ImageLoadError,
    InvalidListenerError,
    PlaybackDeniedError,
    ProbeError,
    TimerElapsedError,
)
from pycue.frames import (
    FrameCoalescer,
    FrameScheduler,
    coalesce,
    double_frame,
    get_frame_scheduler,
    next_frame,
    tick_update,
)
from pycue.images import load_image, load_image_element
from pycue.listeners import (
    ListenerGroup,
    Subscription,
    breakpoint_listen,
    click_outside,
    compose,
    listen,
    on_window_resize,
    register_exits,
)
from pycue.models import HoldPressOptions, ProbeReason, ProbeResult
from pycue.press import HoldPress, LongPress, LongPressState, hold_press, long_press
from pycue.probe import CapabilityProbe, LoadRace, ProbeResource, is_low_power
from pycue.timing import Debounced, Throttled, debounce, throttle, timer

__all__ = [
    "__version__",
    "CapabilityProbe",
    "CueConfig",
    "CueConfigError",
    "CueError",
    "Debounced",
    "Document",
    "Event",
    "EventTarget",
    "FrameCoalescer",
    "FrameScheduler",
    "HoldPress",
    "HoldPressOptions",
    "ImageElement",
    "ImageLoadError",
    "InvalidListenerError",
    "KeyboardEvent",
    "ListenerGroup",
    "LoadRace",
    "LongPress",
    "LongPressState",
    "MediaBackend",
    "MediaElement",
    "MediaQueryList",
    "Node",
    "PlaybackDeniedError",
    "ProbeError",
    "ProbeReason",
    "ProbeResource",
    "ProbeResult",
    "Source",
    "Subscription",
    "Throttled",
    "TimerElapsedError",
    "Window",
    "breakpoint_listen",
    "click_outside",
    "coalesce",
    "compose",
    "debounce",
    "double_frame",
    "get_frame_scheduler",
    "hold_press",
    "is_low_power",
    "listen",
    "load_image",
    "load_image_element",
    "long_press",
    "next_frame",
    "on_window_resize",
    "register_exits",
    "resolve_config",
    "throttle",
    "tick_update",
    "timer",
]
