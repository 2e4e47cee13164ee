"""fakesns data models: all Pydantic v2, all frozen (immutable)."""

from fakesns.models.delivery import DeliveryOutcome, DrainReport
from fakesns.models.envelopes import (
    FAKE_SIGNATURE,
    NOTIFICATION_TYPE,
    SIGNATURE_VERSION,
    SIGNING_CERT_URL,
    NotificationEnvelope,
)
from fakesns.models.resources import (
    Message,
    Queue,
    QueueEntry,
    Subscription,
    TargetKind,
    Topic,
)

__all__ = [
    # resources
    "TargetKind",
    "Topic",
    "Subscription",
    "Message",
    "Queue",
    "QueueEntry",
    # envelopes
    "NotificationEnvelope",
    "NOTIFICATION_TYPE",
    "FAKE_SIGNATURE",
    "SIGNATURE_VERSION",
    "SIGNING_CERT_URL",
    # delivery
    "DeliveryOutcome",
    "DrainReport",
]
