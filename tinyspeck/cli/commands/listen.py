"""``tinyspeck listen`` — serve the webhook listener.

Every accepted request is logged under its topics so the command doubles
as a way to watch what the platform sends.
"""

from __future__ import annotations

import logging

import typer

from tinyspeck.adapter import TinySpeck
from tinyspeck.config import config

logger = logging.getLogger("tinyspeck.cli")


def listen_cmd(
    port: int = typer.Option(config.port, "--port", "-p", help="Port to bind."),
    host: str = typer.Option(config.host, "--host", help="Interface to bind."),
    token: str = typer.Option(
        config.verification_token,
        "--token",
        "-t",
        help="Verification token; requests carrying another token are ignored.",
    ),
) -> None:
    """Listen for webhook requests and log every routed message."""
    speck = TinySpeck(config=config)
    speck.on("*", callback=lambda message: logger.info("Received %s", message))
    speck.listen(port, token or None, host)
