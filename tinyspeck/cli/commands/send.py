"""``tinyspeck send`` — call a Web API method from the command line."""

from __future__ import annotations

import typer
from rich.console import Console

from tinyspeck.adapter import TinySpeck
from tinyspeck.config import config
from tinyspeck.transport.web_api import WebApiError

console = Console()


def parse_arguments(pairs: list[str]) -> dict[str, str]:
    """Turn ``key=value`` strings into a dict."""
    args: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}")
        args[key] = value
    return args


def send_cmd(
    method: str = typer.Argument(..., help="Method name (e.g. chat.postMessage) or URL."),
    arguments: list[str] = typer.Argument(None, help="Method arguments as key=value."),
    token: str = typer.Option(config.token, "--token", "-t", help="API token."),
) -> None:
    """Call METHOD and print the JSON response."""
    payload = parse_arguments(arguments or [])
    defaults = {"token": token} if token else {}

    with TinySpeck(defaults, config=config) as speck:
        try:
            result = speck.send(method, payload)
        except WebApiError as exc:
            console.print(f"[red]Request failed:[/red] {exc}")
            raise typer.Exit(code=1) from exc

    console.print_json(data=result)
    if not result.get("ok", False):
        raise typer.Exit(code=1)
