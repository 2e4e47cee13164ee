"""Queue adapter: enqueues the notification JSON on a queue subscription.

The entry body is the flat notification document, exactly what an SQS
consumer of a real SNS topic sees.
"""

from __future__ import annotations

import logging

from fakesns.core.queues import QueueStore
from fakesns.models.delivery import DeliveryOutcome
from fakesns.models.envelopes import NotificationEnvelope
from fakesns.models.resources import Subscription, TargetKind

logger = logging.getLogger(__name__)


class QueueAdapter:
    """Delivers notifications into the in-process queue store.

    Enqueue is synchronous: it either adds one visible entry or raises
    (``QueueDoesNotExistError`` if the queue was deleted).
    """

    def __init__(self, queues: QueueStore) -> None:
        self._queues = queues

    @property
    def adapter_name(self) -> str:
        return "queue"

    @property
    def target_kind(self) -> TargetKind:
        return TargetKind.QUEUE

    def deliver(
        self, envelope: NotificationEnvelope, subscription: Subscription
    ) -> DeliveryOutcome:
        entry = self._queues.enqueue(subscription.endpoint, envelope.to_json())
        logger.debug(
            "QueueAdapter: message %s -> %s as entry %s",
            envelope.message_id,
            subscription.endpoint,
            entry.message_id,
        )
        return DeliveryOutcome(
            message_id=envelope.message_id,
            subscription_arn=subscription.arn,
            protocol=subscription.protocol,
            endpoint=subscription.endpoint,
            succeeded=True,
        )
