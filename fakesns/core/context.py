"""SnsContext: one simulated notification service, wired and resettable.

The context owns every store (queues, topics/subscriptions, pending
messages) plus the delivery machinery, and is passed explicitly to
whatever needs it.  ``reset()`` returns it to an empty state without
rebuilding adapters, which is what test suites want between cases.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from fakesns.config import SnsSettings, settings as default_settings
from fakesns.core.drain import DrainCoordinator
from fakesns.core.identifiers import IdentifierGenerator
from fakesns.core.message_store import MessageStore
from fakesns.core.queues import QueueStore
from fakesns.core.registry import SubscriptionRegistry
from fakesns.models.delivery import DrainReport
from fakesns.models.resources import Queue, Subscription, Topic
from fakesns.routing.adapters.http import HttpAdapter
from fakesns.routing.adapters.queue import QueueAdapter
from fakesns.routing.dispatcher import DeliveryDispatcher

logger = logging.getLogger(__name__)


class SnsContext:
    """Process-wide simulated SNS + SQS.

    Parameters
    ----------
    settings:
        Region, account and delivery settings.  Defaults to the
        environment-driven module singleton.
    http_client:
        ``httpx.Client`` used for HTTP subscriptions.  When omitted the
        HTTP adapter builds its own with ``settings.http_timeout_seconds``.
    id_factory:
        Optional unique-id factory forwarded to the identifier generator.
    """

    def __init__(
        self,
        settings: SnsSettings | None = None,
        *,
        http_client: httpx.Client | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.identifiers = IdentifierGenerator(
            region=self.settings.region,
            account_id=self.settings.account_id,
            queue_url_base=self.settings.queue_url_base,
            id_factory=id_factory,
        )
        self.queues = QueueStore(self.identifiers)
        self.registry = SubscriptionRegistry(self.identifiers, self.queues)
        self.messages = MessageStore(self.identifiers)

        self._http_adapter = HttpAdapter(
            http_client, timeout_seconds=self.settings.http_timeout_seconds
        )
        self.dispatcher = DeliveryDispatcher()
        self.dispatcher.register_adapter(QueueAdapter(self.queues))
        self.dispatcher.register_adapter(self._http_adapter)

        self.coordinator = DrainCoordinator(
            self.registry,
            self.messages,
            self.dispatcher,
            max_workers=self.settings.max_delivery_workers,
        )

    # ------------------------------------------------------------------
    # Topics and subscriptions
    # ------------------------------------------------------------------

    def create_topic(self, name: str, display_name: str = "") -> Topic:
        return self.registry.create_topic(name, display_name)

    def delete_topic(self, topic: Topic | str) -> None:
        """Delete a topic, its subscriptions and its undrained messages."""
        self.registry.delete_topic(topic)
        self.messages.discard_topic(topic)
        self.coordinator.forget_topic(topic.arn if isinstance(topic, Topic) else topic)

    def subscribe(self, topic: Topic | str, target: Queue | str) -> Subscription:
        return self.registry.subscribe(topic, target)

    # ------------------------------------------------------------------
    # Queues
    # ------------------------------------------------------------------

    def create_queue(self, name: str) -> Queue:
        return self.queues.create_queue(name)

    # ------------------------------------------------------------------
    # Publish / drain
    # ------------------------------------------------------------------

    def publish(self, topic: Topic | str, body: str, subject: str | None = None) -> str:
        """Publish *body* to *topic* and return the new message id.

        Raises
        ------
        TopicNotFoundError
            If *topic* is not registered.
        """
        topic_arn = topic.arn if isinstance(topic, Topic) else topic
        self.registry.get_topic(topic_arn)
        return self.messages.publish(topic_arn, body, subject)

    def drain(self, message_id: str | None = None) -> DrainReport:
        """Deliver pending messages; see :meth:`DrainCoordinator.drain`."""
        return self.coordinator.drain(message_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Forget every topic, subscription, pending message and queue."""
        self.messages.reset()
        self.registry.reset()
        self.queues.reset()
        self.coordinator.reset()
        logger.info("SnsContext: reset")

    def close(self) -> None:
        """Release the HTTP client if the context created it."""
        self._http_adapter.close()

    def __enter__(self) -> SnsContext:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"SnsContext(region={self.identifiers.region!r}, "
            f"topics={len(self.registry.list_topics())}, "
            f"pending={len(self.messages)})"
        )

