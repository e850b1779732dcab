"""``tinyspeck rtm`` — open a realtime session and log its events."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from tinyspeck.adapter import TinySpeck
from tinyspeck.config import config
from tinyspeck.transport.rtm import RtmError
from tinyspeck.transport.web_api import WebApiError

console = Console()
logger = logging.getLogger("tinyspeck.cli")


async def _run(speck: TinySpeck) -> None:
    client = await speck.rtm()
    console.print(
        f"[green]Connected[/green] as [bold]{speck.cache.get('name', 'unknown')}[/bold]"
    )
    await client.wait_closed()


def rtm_cmd(
    token: str = typer.Option(config.token, "--token", "-t", help="API token."),
) -> None:
    """Connect to the realtime API and log every event until interrupted."""
    speck = TinySpeck({"token": token} if token else {}, config=config)
    speck.on("*", callback=lambda message: logger.info("Event %s", message))

    try:
        asyncio.run(_run(speck))
    except (RtmError, WebApiError) as exc:
        console.print(f"[red]Realtime session failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    except KeyboardInterrupt:
        console.print("[dim]Disconnected.[/dim]")
