"""``fakesns config``: show the effective settings."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from fakesns.config import SnsSettings

console = Console()


def config_cmd() -> None:
    """Print every setting after .env and FAKESNS_* overrides."""
    current = SnsSettings()
    table = Table(title="fakesns settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in current.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)
