"""``fakesns render``: print the notification JSON for a message."""

from __future__ import annotations

import typer
from rich.console import Console

from fakesns.core.context import SnsContext
from fakesns.core.errors import FakeSnsError
from fakesns.core.renderer import render_envelope

console = Console()


def render_cmd(
    body: str = typer.Argument(..., help="Message body."),
    topic_name: str = typer.Option("fakesns-cli", "--topic", "-t", help="Topic name."),
    subject: str = typer.Option(None, "--subject", "-s", help="Optional subject."),
) -> None:
    """Render the notification a subscriber of *topic_name* would receive."""
    with SnsContext() as ctx:
        try:
            topic = ctx.create_topic(topic_name)
        except FakeSnsError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=2)
        subscription = ctx.subscribe(topic, ctx.create_queue(f"{topic_name}-render"))
        message_id = ctx.publish(topic, body, subject=subject)
        (message,) = ctx.messages.pending_for(topic, message_id)
        envelope = render_envelope(topic, message, subscription)

    console.print_json(envelope.to_json())
