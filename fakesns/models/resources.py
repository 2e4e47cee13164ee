"""Resource models: topics, subscriptions, pending messages and queues.

Each resource is a frozen Pydantic model.  Stores hand these out freely;
nobody can mutate a topic or subscription after creation.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TargetKind(str, Enum):
    """The two kinds of subscription target."""

    QUEUE = "queue"
    HTTP = "http"


class Topic(BaseModel):
    """A named publish/subscribe channel."""

    model_config = ConfigDict(frozen=True)

    arn: str
    name: str
    display_name: str = ""
    created_at: datetime = Field(default_factory=_utcnow)


class Subscription(BaseModel):
    """A delivery target attached to exactly one topic.

    ``endpoint`` is a queue ARN for ``TargetKind.QUEUE`` and an HTTP(S)
    URL for ``TargetKind.HTTP``.
    """

    model_config = ConfigDict(frozen=True)

    arn: str
    topic_arn: str
    target_kind: TargetKind
    endpoint: str
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def protocol(self) -> str:
        """The SNS wire protocol name (``sqs``, ``http`` or ``https``)."""
        if self.target_kind is TargetKind.QUEUE:
            return "sqs"
        return "https" if self.endpoint.startswith("https://") else "http"


class Message(BaseModel):
    """A published message waiting to be drained."""

    model_config = ConfigDict(frozen=True)

    message_id: str
    topic_arn: str
    body: str
    subject: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class Queue(BaseModel):
    """Reference to a queue in the in-process queue store."""

    model_config = ConfigDict(frozen=True)

    name: str
    arn: str
    url: str


class QueueEntry(BaseModel):
    """A single message sitting in a queue."""

    model_config = ConfigDict(frozen=True)

    message_id: str
    body: str
    md5_of_body: str
    sent_at: datetime = Field(default_factory=_utcnow)
