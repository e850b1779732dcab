"""Webhook listener — a FastAPI app that feeds HTTP request bodies to the dispatcher.

Accepts ``POST`` on any path.  The decoded body is first published under
the request path (``/slack/events``, ``/commands`` ...) and then, if it
passes the optional token check, routed through the normal classifier.
A ``challenge`` field is echoed back verbatim for URL verification.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from tinyspeck.core.decoder import PayloadDecodeError, decode
from tinyspeck.core.dispatcher import SubscriberError

if TYPE_CHECKING:
    from tinyspeck.core.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


def create_listener_app(
    dispatcher: EventDispatcher, token: str | None = None
) -> FastAPI:
    """Build the listener application.

    Parameters
    ----------
    dispatcher:
        Receives every accepted message.
    token:
        When set, messages whose ``token`` field differs are acknowledged
        but not dispatched.
    """
    app = FastAPI(title="TinySpeck listener", docs_url=None, redoc_url=None)

    @app.post("/{path:path}")
    async def receive(path: str, request: Request) -> Response:
        body = await request.body()
        try:
            message = decode(body)
        except PayloadDecodeError as exc:
            logger.warning("Rejected request to %s: %s", request.url.path, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        try:
            await run_in_threadpool(dispatcher.publish, request.url.path, message)

            if not body:
                return Response(status_code=200)
            if token and message.get("token") != token:
                logger.warning("Ignored request to %s: token mismatch", request.url.path)
                return Response(status_code=200)

            await run_in_threadpool(dispatcher.route, message)
        except SubscriberError as exc:
            logger.error("Dispatch aborted for %s: %s", request.url.path, exc)
            raise HTTPException(status_code=500, detail="subscriber failed") from exc

        challenge = message.get("challenge")
        if challenge is not None:
            return PlainTextResponse(str(challenge))
        return Response(status_code=200)

    return app
