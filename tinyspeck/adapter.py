"""TinySpeck adapter — one object bundling routing, the Web API and the transports.

Typical use::

    speck = TinySpeck({"token": "xoxb-..."})

    @speck.on("/deploy")
    def deploy(message):
        speck.send("chat.postMessage", {"channel": message["channel_id"], "text": "ok"})

    speck.listen(3000)

``instance(defaults)`` makes independently configured copies that share
the configuration but not the subscribers.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from tinyspeck.config import SpeckConfig
from tinyspeck.core.classifier import EventClassifier
from tinyspeck.core.decoder import CanonicalMessage
from tinyspeck.core.dispatcher import EventDispatcher
from tinyspeck.core.registry import Callback, EventRegistry
from tinyspeck.transport.rtm import RtmClient, RtmError
from tinyspeck.transport.web_api import WebApiClient

logger = logging.getLogger(__name__)


class TinySpeck:
    """Adapter between a host application and the chat platform.

    Parameters
    ----------
    defaults:
        Arguments merged under every outbound call (typically ``token``).
    config:
        Settings; a fresh :class:`SpeckConfig` is read from the environment
        when omitted.
    api:
        Web API client.  Built from *config* when omitted.
    """

    def __init__(
        self,
        defaults: Mapping[str, Any] | None = None,
        *,
        config: SpeckConfig | None = None,
        api: WebApiClient | None = None,
    ) -> None:
        self.config = config or SpeckConfig()
        self.defaults: dict[str, Any] = dict(defaults or {})
        self.cache: dict[str, Any] = {}
        self._owns_api = api is None
        self.api = api or WebApiClient(
            self.config.api_base_url, timeout=self.config.request_timeout
        )
        self.dispatcher = EventDispatcher(
            EventRegistry(),
            EventClassifier(self.config.classifier_config()),
            error_policy=self.config.error_policy,
        )
        self._rtm: RtmClient | None = None

    def instance(self, defaults: Mapping[str, Any] | None = None) -> TinySpeck:
        """Return a new adapter with its own *defaults* and subscribers."""
        return type(self)(defaults, config=self.config, api=self.api)

    @property
    def registry(self) -> EventRegistry:
        return self.dispatcher.registry

    def close(self) -> None:
        """Release the Web API client if this adapter created it.

        Adapters from :meth:`instance` share their parent's client and leave
        it open.
        """
        if self._owns_api:
            self.api.close()

    def __enter__(self) -> TinySpeck:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on(self, *topics: str, callback: Callback | None = None) -> Any:
        """Subscribe *callback* to one or more topics.

        Returns the adapter for chaining.  Without *callback* it returns a
        decorator instead::

            @speck.on("message", "app_mention")
            def handle(message): ...
        """
        if not topics:
            raise ValueError("At least one topic is required")

        if callback is not None:
            self.registry.subscribe(topics, callback)
            return self

        def decorator(fn: Callback) -> Callback:
            self.registry.subscribe(topics, fn)
            return fn

        return decorator

    def off(self, callback: Callback, *topics: str) -> int:
        """Unsubscribe *callback* from *topics* (all topics when none given)."""
        return self.registry.unsubscribe(callback, topics or None)

    def digest(self, raw: str | bytes | Mapping[str, Any]) -> CanonicalMessage:
        """Decode an inbound payload and notify every matching subscriber."""
        return self.dispatcher.dispatch(raw)

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    def send(
        self, endpoint: str, payload: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Call a Web API method with *payload* layered over the defaults."""
        args = {**self.defaults, **(payload or {})}
        return self.post(endpoint, args)

    def post(self, endpoint: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        """POST *payload* to *endpoint* as is, without applying defaults."""
        return self.api.post(endpoint, payload)

    async def chat(self, message: str | Mapping[str, Any]) -> dict[str, Any]:
        """Create or update a chat message using the best connector.

        Plain messages go over the realtime socket when one is open.
        Messages with attachments or a ``ts`` (an update) always use the
        Web API.
        """
        if isinstance(message, str):
            message = {"text": message}

        if self.rtm_connected and not message.get("attachments") and not message.get("ts"):
            args = {**self.defaults, "type": "message", **message}
            return await self._rtm.send_json(args)

        method = "chat.update" if message.get("ts") else "chat.postMessage"
        return await asyncio.to_thread(self.send, method, message)

    # ------------------------------------------------------------------
    # Transports
    # ------------------------------------------------------------------

    @property
    def rtm_connected(self) -> bool:
        return self._rtm is not None and self._rtm.is_connected

    async def rtm(self, **options: Any) -> RtmClient:
        """Start a realtime session and stream its events into :meth:`digest`.

        Raises
        ------
        RtmError
            If ``rtm.start`` is refused or returns no socket URL.
        """
        data = await asyncio.to_thread(self.send, "rtm.start", options)
        url = data.get("url")
        if not data.get("ok", True) or not url:
            raise RtmError(f"rtm.start failed: {data.get('error', 'no url returned')}")

        self.cache = data.get("self") or {}
        client = RtmClient(self.digest, on_close=self._rtm_closed)
        await client.connect(url)
        self._rtm = client
        return client

    def _rtm_closed(self) -> None:
        self._rtm = None

    def listener_app(self, token: str | None = None) -> Any:
        """Return the FastAPI webhook app bound to this adapter."""
        from tinyspeck.transport.listener import create_listener_app

        return create_listener_app(self.dispatcher, token)

    def listen(
        self,
        port: int | None = None,
        token: str | None = None,
        host: str | None = None,
    ) -> None:
        """Serve webhooks until interrupted (blocking)."""
        import uvicorn

        host = host or self.config.host
        port = port or self.config.port
        token = token if token is not None else self.config.verification_token or None

        logger.info("Listening for events on http://%s:%d", host, port)
        uvicorn.run(self.listener_app(token), host=host, port=port, log_level="warning")


def create(defaults: Mapping[str, Any] | None = None, **kwargs: Any) -> TinySpeck:
    """Build a new adapter; keyword arguments are passed to :class:`TinySpeck`."""
    return TinySpeck(defaults, **kwargs)
