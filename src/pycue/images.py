"""Image loading helpers."""

from __future__ import annotations

import asyncio
import base64
import contextlib
import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pycue._redact import redact_for_log
from pycue.dom import Document, Event, ImageElement
from pycue.exceptions import ImageLoadError
from pycue.listeners import compose, listen

_logger = logging.getLogger(__name__)

_DEFAULT_CONTENT_TYPE = "application/octet-stream"


async def load_image_element(document: Document, src: str, *, timeout: float | None = None) -> ImageElement:
    """Create an ``img`` element for *src* and wait until it has loaded.

    Raises
    ------
    ImageLoadError
        If the element reports ``error`` or *timeout* elapses first.
    """
    img = document.create_element("img")
    if not isinstance(img, ImageElement):
        raise ImageLoadError("Document cannot create image elements", src=src)

    future: asyncio.Future[ImageElement] = asyncio.get_running_loop().create_future()

    def on_load(_event: Event) -> None:
        if not future.done():
            future.set_result(img)

    def on_error(_event: Event) -> None:
        if not future.done():
            future.set_exception(ImageLoadError(f"Failed to load image {redact_for_log(src)}", src=src))

    unlisten = compose(listen(img, "load", on_load), listen(img, "error", on_error))
    try:
        img.src = src
        if timeout is None:
            return await future
        try:
            return await asyncio.wait_for(future, timeout)
        except TimeoutError as exc:
            raise ImageLoadError(f"Image did not load within {timeout}s", src=src) from exc
    finally:
        unlisten()


async def _fetch(http: aiohttp.ClientSession, src: str) -> tuple[str, bytes]:
    _logger.debug("GET %s", redact_for_log(src))
    try:
        async with http.get(src) as resp:
            body = await resp.read()
            if resp.status != 200:
                raise ImageLoadError(
                    f"HTTP {resp.status} from {src}",
                    src=src,
                    status_code=resp.status,
                )
            content_type = resp.content_type or _DEFAULT_CONTENT_TYPE
    except ImageLoadError:
        raise
    except aiohttp.ClientError as exc:
        raise ImageLoadError(f"Request to {src} failed: {exc}", src=src) from exc
    return content_type, body


def to_data_url(content_type: str, body: bytes) -> str:
    encoded = base64.b64encode(body).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


async def load_image(
    src: str,
    *,
    session: aiohttp.ClientSession | None = None,
    on_abort: Callable[[asyncio.Event], Any] | None = None,
) -> str:
    """Fetch *src* and return it as a ``data:`` URL.

    Parameters
    ----------
    src : str
        Image URL.
    session : aiohttp.ClientSession, optional
        Session to fetch with. A private session is opened and closed when
        omitted.
    on_abort : callable, optional
        Receives an :class:`asyncio.Event`; setting it aborts the fetch.

    Raises
    ------
    ImageLoadError
        On HTTP/client failure, or with ``aborted=True`` when aborted.
    """
    abort = asyncio.Event()
    if on_abort is not None:
        on_abort(abort)

    owns_session = session is None
    http = session if session is not None else aiohttp.ClientSession()
    loop = asyncio.get_running_loop()
    try:
        fetch = loop.create_task(_fetch(http, src))
        aborted = loop.create_task(abort.wait())
        try:
            await asyncio.wait({fetch, aborted}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (fetch, aborted):
                if not task.done():
                    task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await aborted

        if not fetch.done() or fetch.cancelled():
            with contextlib.suppress(asyncio.CancelledError):
                await fetch
            _logger.debug("Image fetch aborted src=%s", redact_for_log(src))
            raise ImageLoadError(f"Fetch of {src} aborted", src=src, aborted=True)

        content_type, body = fetch.result()
    finally:
        if owns_session:
            await http.close()

    _logger.debug("Fetched image src=%s bytes=%d type=%s", redact_for_log(src), len(body), content_type)
    return to_data_url(content_type, body)
