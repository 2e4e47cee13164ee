"""``fakesns deliver``: publish one message to an HTTP endpoint and drain it.

Handy for checking that a webhook receiver accepts SNS notifications.
Exits with status 1 if the delivery failed.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from fakesns.core.context import SnsContext
from fakesns.core.errors import FakeSnsError

console = Console()


def deliver_cmd(
    endpoint: str = typer.Argument(..., help="HTTP(S) URL to POST the notification to."),
    body: str = typer.Argument(..., help="Message body."),
    topic_name: str = typer.Option("fakesns-cli", "--topic", "-t", help="Topic name."),
    subject: str = typer.Option(None, "--subject", "-s", help="Optional subject."),
) -> None:
    """Subscribe *endpoint* to a fresh topic, publish *body* and drain."""
    with SnsContext() as ctx:
        try:
            topic = ctx.create_topic(topic_name)
            subscription = ctx.subscribe(topic, endpoint)
        except FakeSnsError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=2)

        message_id = ctx.publish(topic, body, subject=subject)
        report = ctx.drain()

    table = Table(title="Delivery")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Message ID", message_id)
    table.add_row("Subscription", subscription.arn)
    for outcome in report.outcomes:
        status = "[green]delivered[/green]" if outcome.succeeded else f"[red]failed[/red] ({outcome.error})"
        table.add_row("Status", status)
        if outcome.status_code is not None:
            table.add_row("HTTP status", str(outcome.status_code))
    console.print(table)

    if report.failed:
        raise typer.Exit(code=1)
