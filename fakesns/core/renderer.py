"""Envelope renderer: (topic, message, subscription) -> notification.

Pure function: the only input not taken from the arguments is the clock,
and even that can be pinned with *now*.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fakesns.models.envelopes import NotificationEnvelope
from fakesns.models.resources import Message, Subscription, Topic


def format_timestamp(moment: datetime) -> str:
    """Format *moment* as ISO-8601 UTC with milliseconds, e.g. ``2024-01-02T03:04:05.678Z``."""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def render_envelope(
    topic: Topic,
    message: Message,
    subscription: Subscription,
    *,
    now: datetime | None = None,
) -> NotificationEnvelope:
    """Build the notification a subscriber receives for *message*.

    The timestamp is taken at render time (drain time), not publish time.
    *subscription* does not influence the payload today; the unsubscribe
    URL is always empty in the simulated service.
    """
    return NotificationEnvelope(
        message=message.body,
        message_id=message.message_id,
        subject=message.subject,
        timestamp=format_timestamp(now or datetime.now(timezone.utc)),
        topic_arn=topic.arn,
    )
