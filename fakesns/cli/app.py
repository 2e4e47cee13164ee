"""Main Typer application: imports and registers all CLI commands.

Entry point: ``fakesns`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from fakesns.cli.commands.config_cmd import config_cmd
from fakesns.cli.commands.deliver import deliver_cmd
from fakesns.cli.commands.demo import demo_cmd
from fakesns.cli.commands.render import render_cmd
from fakesns.config import settings

app = typer.Typer(
    name="fakesns",
    help="fakesns: in-process fake SNS with on-demand drain.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="demo", help="Run the publish/drain scenario against in-memory queues.")(demo_cmd)
app.command(name="deliver", help="Publish one message to an HTTP endpoint and drain it.")(deliver_cmd)
app.command(name="render", help="Print the notification JSON for a message.")(render_cmd)
app.command(name="config", help="Show the effective settings.")(config_cmd)


@app.callback()
def main(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (defaults to FAKESNS_LOG_LEVEL)."
    ),
) -> None:
    """Configure logging for every subcommand."""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    app()
