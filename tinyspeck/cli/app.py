"""Main Typer application — imports and registers all CLI commands.

Entry point: ``tinyspeck`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from tinyspeck.cli.commands.digest import digest_cmd
from tinyspeck.cli.commands.listen import listen_cmd
from tinyspeck.cli.commands.rtm import rtm_cmd
from tinyspeck.cli.commands.send import send_cmd
from tinyspeck.config import config

app = typer.Typer(
    name="tinyspeck",
    help="TinySpeck: minimal Slack adapter with topic routing.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="listen", help="Serve the webhook listener.")(listen_cmd)
app.command(name="send", help="Call a Web API method.")(send_cmd)
app.command(name="digest", help="Show how a payload is decoded and routed.")(digest_cmd)
app.command(name="rtm", help="Stream realtime events.")(rtm_cmd)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        config.log_level, "--log-level", help="Logging level for this run."
    ),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
