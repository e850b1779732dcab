"""Realtime messaging client — a persistent socket feeding the dispatcher.

Every frame received, text or binary, is handed to a ``digest`` callable
(normally :meth:`TinySpeck.digest <tinyspeck.adapter.TinySpeck.digest>`).
Frames whose nested payload cannot be decoded, or whose delivery a
fail-fast subscriber aborted, are logged and skipped so one bad frame does
not tear down the connection.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any

import websockets

from tinyspeck.core.decoder import PayloadDecodeError
from tinyspeck.core.dispatcher import SubscriberError

logger = logging.getLogger(__name__)


class RtmError(RuntimeError):
    """Raised when a realtime session cannot be started or used."""


class RtmClient:
    """Receives realtime events and sends outbound frames.

    Parameters
    ----------
    digest:
        Called with every inbound frame (``str`` or ``bytes``).
    on_close:
        Called once when the receive loop ends, for any reason.
    """

    def __init__(
        self,
        digest: Callable[[str | bytes], Any],
        *,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self._digest = digest
        self._on_close = on_close
        self._ws: Any = None
        self._task_recv: asyncio.Task | None = None
        self._closed = asyncio.Event()

    @property
    def is_connected(self) -> bool:
        return self._ws is not None

    async def connect(self, url: str) -> None:
        """Open the socket and start the receive loop."""
        logger.info("Connecting realtime socket %s", url)
        try:
            self._ws = await websockets.connect(url)
        except (OSError, websockets.WebSocketException) as exc:
            raise RtmError(f"Realtime connection to {url} failed: {exc}") from exc
        self._task_recv = asyncio.create_task(self._recv_loop())

    async def send_json(self, message: dict[str, Any]) -> dict[str, Any]:
        """Send *message* as a JSON text frame and return it."""
        if self._ws is None:
            raise RtmError("Realtime socket is not connected")
        await self._ws.send(json.dumps(message))
        return message

    async def wait_closed(self) -> None:
        """Block until the connection has gone away."""
        await self._closed.wait()

    async def close(self) -> None:
        ws = self._ws
        if ws is not None:
            await ws.close()
        if self._task_recv is not None:
            await self._task_recv

    async def _recv_loop(self) -> None:
        ws = self._ws
        try:
            async for frame in ws:
                try:
                    self._digest(frame)
                except (PayloadDecodeError, SubscriberError) as exc:
                    logger.error("Dropped realtime frame: %s", exc)
        except websockets.ConnectionClosed as exc:
            logger.info("Realtime socket closed: %s", exc)
        finally:
            self._ws = None
            await ws.close()
            self._closed.set()
            logger.info("Realtime socket disconnected")
            if self._on_close is not None:
                self._on_close()
