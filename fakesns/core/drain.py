"""Drain coordinator: select, fan out, deliver, commit.

A drain walks the pending messages in scope, renders one notification per
current subscription of the message's topic, hands each to the delivery
dispatcher, and finally removes the message from the pending store.

Concurrency
-----------
Drains touching the same topic are serialized by a per-topic lock; a
global drain takes the locks of every selected topic in sorted order.
Messages are delivered one at a time in publish order.  The deliveries
of one message run in parallel on a thread pool, and the drain waits for
all of them before committing that message and moving to the next, so
each subscriber sees publish order and "drain returned" means "every
eligible message was attempted".  Messages published after the pending
snapshot was taken are left for the next drain.
"""

from __future__ import annotations

import collections
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack

from fakesns.core.errors import TopicNotFoundError
from fakesns.core.message_store import MessageStore
from fakesns.core.registry import SubscriptionRegistry
from fakesns.core.renderer import render_envelope
from fakesns.models.delivery import DeliveryOutcome, DrainReport
from fakesns.models.resources import Message, Subscription, Topic
from fakesns.routing.dispatcher import DeliveryDispatcher

logger = logging.getLogger(__name__)


class DrainCoordinator:
    """Performs drains over a registry and a message store.

    Parameters
    ----------
    registry:
        Source of topics and subscription snapshots.
    messages:
        Pending message store; the coordinator is the only caller of
        ``mark_delivered``.
    dispatcher:
        Routes each rendered notification to the right adapter.
    max_workers:
        Upper bound on concurrent deliveries of one message.
    """

    def __init__(
        self,
        registry: SubscriptionRegistry,
        messages: MessageStore,
        dispatcher: DeliveryDispatcher,
        *,
        max_workers: int = 8,
    ) -> None:
        self._registry = registry
        self._messages = messages
        self._dispatcher = dispatcher
        self._max_workers = max(1, max_workers)
        self._locks_guard = threading.Lock()
        self._topic_locks: collections.defaultdict[str, threading.Lock] = (
            collections.defaultdict(threading.Lock)
        )

    def drain(self, message_id: str | None = None) -> DrainReport:
        """Deliver pending messages and remove them from the store.

        With *message_id*, only that message is drained (if it is still
        pending).  Without it, every pending message on every topic is.
        Nothing pending is a no-op.
        """
        if message_id is not None:
            topic_arn = self._messages.topic_of(message_id)
            if topic_arn is None:
                logger.debug("Drain: message %s is not pending", message_id)
                return DrainReport()
            topic_arns = [topic_arn]
        else:
            topic_arns = sorted(self._messages.topics_with_pending())

        if not topic_arns:
            return DrainReport()

        with ExitStack() as stack:
            for topic_arn in topic_arns:
                stack.enter_context(self._lock_for(topic_arn))
            return self._drain_locked(topic_arns, message_id)

    def forget_topic(self, topic_arn: str) -> None:
        """Drop the drain lock of a deleted topic."""
        with self._locks_guard:
            self._topic_locks.pop(topic_arn, None)

    def reset(self) -> None:
        with self._locks_guard:
            self._topic_locks.clear()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _drain_locked(self, topic_arns: list[str], message_id: str | None) -> DrainReport:
        # Select under the topic locks so a concurrent drain's commits are visible.
        drained: list[str] = []
        outcomes: list[DeliveryOutcome] = []

        with ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="fakesns-deliver"
        ) as pool:
            for topic_arn in topic_arns:
                pending = self._messages.pending_for(topic_arn, message_id)
                if not pending:
                    continue
                topic = self._resolve_topic(topic_arn)
                subscriptions = self._registry.subscriptions_for(topic_arn) if topic else ()
                if not subscriptions:
                    logger.info(
                        "Drain: %s has no subscriptions; draining %d message(s) undelivered",
                        topic_arn,
                        len(pending),
                    )
                # One message at a time: siblings run in parallel, each
                # subscriber still sees publish order.
                for message in pending:
                    futures = [
                        pool.submit(self._deliver, topic, message, subscription)
                        for subscription in subscriptions
                    ]
                    outcomes.extend(future.result() for future in futures)
                    if self._messages.mark_delivered(message):
                        drained.append(message.message_id)

        report = DrainReport(drained_message_ids=drained, outcomes=outcomes)
        logger.info(
            "Drain: %d message(s) drained, %d/%d deliveries succeeded",
            len(drained),
            len(report.delivered),
            len(outcomes),
        )
        return report

    def _deliver(
        self, topic: Topic, message: Message, subscription: Subscription
    ) -> DeliveryOutcome:
        try:
            envelope = render_envelope(topic, message, subscription)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Render failed for message %s -> %s: %s",
                message.message_id,
                subscription.arn,
                exc,
            )
            return DeliveryOutcome(
                message_id=message.message_id,
                subscription_arn=subscription.arn,
                protocol=subscription.protocol,
                endpoint=subscription.endpoint,
                succeeded=False,
                error=f"render failed: {exc}",
            )
        return self._dispatcher.dispatch(envelope, subscription)

    def _resolve_topic(self, topic_arn: str) -> Topic | None:
        try:
            return self._registry.get_topic(topic_arn)
        except TopicNotFoundError:
            logger.warning("Drain: topic %s no longer exists", topic_arn)
            return None

    def _lock_for(self, topic_arn: str) -> threading.Lock:
        with self._locks_guard:
            return self._topic_locks[topic_arn]
