"""``fakesns demo``: run the publish/drain scenario against in-memory queues.

Creates a topic with one queue subscriber, publishes two messages, drains
the first by id, then drains everything twice, showing the queue depth
after every step so the exactly-once behaviour is visible.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fakesns.core.context import SnsContext

console = Console()


def demo_cmd(
    topic_name: str = typer.Option("demo-topic", "--topic", "-t", help="Topic name."),
    queue_name: str = typer.Option("demo-queue", "--queue", "-q", help="Queue name."),
) -> None:
    """Run the publish/drain demo and print the queue depth per step."""
    with SnsContext() as ctx:
        topic = ctx.create_topic(topic_name)
        queue = ctx.create_queue(queue_name)
        ctx.subscribe(topic, queue)

        console.print()
        console.print(
            Panel(
                f"[bold]fakesns demo[/bold]\n\n"
                f"Topic: [cyan]{topic.arn}[/cyan]\n"
                f"Queue: [cyan]{queue.arn}[/cyan]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

        first = ctx.publish(topic, "X")
        ctx.publish(topic, "Y")

        table = Table(title="Drain steps")
        table.add_column("Step", style="bold")
        table.add_column("Drained", justify="right")
        table.add_column("Visible in queue", justify="right", style="green")

        steps = [
            (f"drain({first[:8]}…)", lambda: ctx.drain(first)),
            ("drain()", ctx.drain),
            ("drain() again", ctx.drain),
        ]
        for label, step in steps:
            report = step()
            table.add_row(
                label,
                str(len(report.drained_message_ids)),
                str(ctx.queues.visible_messages(queue)),
            )

        console.print(table)
        for entry in ctx.queues.peek(queue):
            console.print_json(entry.body)
