"""``tinyspeck digest`` — decode a payload and show the topics it routes to.

Nothing is sent anywhere; this is a dry run of the decode and classify
steps for debugging subscriptions.
"""

from __future__ import annotations

import sys

import typer
from rich.console import Console
from rich.table import Table

from tinyspeck.core.classifier import EventClassifier
from tinyspeck.core.decoder import PayloadDecodeError, decode
from tinyspeck.models.classification import ClassifierConfig

console = Console()


def digest_cmd(
    payload: str = typer.Argument(
        None, help="Raw payload (JSON or URL-encoded). Read from stdin when omitted."
    ),
    categories: bool = typer.Option(
        False, "--categories", "-c", help="Also emit broad category topics."
    ),
) -> None:
    """Decode PAYLOAD and list its canonical fields and topics."""
    raw = payload if payload is not None else sys.stdin.read()

    try:
        message = decode(raw)
    except PayloadDecodeError as exc:
        console.print(f"[red]Malformed payload:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    rules = ClassifierConfig.with_categories() if categories else ClassifierConfig()
    topics = EventClassifier(rules).classify(message)

    console.print_json(data=message)

    table = Table(title="Topics")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Topic", style="cyan")
    for index, topic in enumerate(topics, start=1):
        table.add_row(str(index), topic)
    console.print(table)
