"""Subscription registry: topics and their ordered subscriber lists.

The registry is the sole owner of topics and subscriptions.  It knows
nothing about pending messages; the drain coordinator joins the two by
topic ARN.
"""

from __future__ import annotations

import logging
import re
import threading
from urllib.parse import urlparse

from fakesns.core.errors import (
    DuplicateTopicError,
    InvalidParameterError,
    InvalidTargetError,
    TopicNotFoundError,
)
from fakesns.core.identifiers import IdentifierGenerator
from fakesns.core.queues import QueueStore
from fakesns.models.resources import Queue, Subscription, TargetKind, Topic

logger = logging.getLogger(__name__)

_TOPIC_NAME_RE = re.compile(r"[A-Za-z0-9_-]{1,256}")


class SubscriptionRegistry:
    """Holds topics and, per topic, subscriptions in insertion order.

    Parameters
    ----------
    identifiers:
        Generates topic and subscription ARNs.
    queues:
        Used to resolve queue ARNs passed as subscription targets.
    """

    def __init__(self, identifiers: IdentifierGenerator, queues: QueueStore) -> None:
        self._ids = identifiers
        self._queues = queues
        self._lock = threading.Lock()
        self._topics: dict[str, Topic] = {}
        self._subscriptions: dict[str, list[Subscription]] = {}

    # ------------------------------------------------------------------
    # Topics
    # ------------------------------------------------------------------

    def create_topic(self, name: str, display_name: str = "") -> Topic:
        """Create a topic with an empty subscriber list.

        Raises
        ------
        InvalidParameterError
            If *name* is not 1-256 alphanumerics, hyphens or underscores.
        DuplicateTopicError
            If a topic named *name* already exists.
        """
        if not _TOPIC_NAME_RE.fullmatch(name):
            raise InvalidParameterError(f"Invalid topic name: {name!r}")

        topic = Topic(arn=self._ids.topic_arn(name), name=name, display_name=display_name)
        with self._lock:
            if topic.arn in self._topics:
                raise DuplicateTopicError(f"Topic already exists: {name!r}")
            self._topics[topic.arn] = topic
            self._subscriptions[topic.arn] = []
        logger.info("Created topic %s", topic.arn)
        return topic

    def get_topic(self, topic_arn: str) -> Topic:
        with self._lock:
            try:
                return self._topics[topic_arn]
            except KeyError:
                raise TopicNotFoundError(f"Topic does not exist: {topic_arn!r}") from None

    def list_topics(self) -> list[Topic]:
        with self._lock:
            return list(self._topics.values())

    def delete_topic(self, topic: Topic | str) -> None:
        """Remove a topic together with all of its subscriptions."""
        topic_arn = _arn_of(topic)
        with self._lock:
            if topic_arn not in self._topics:
                raise TopicNotFoundError(f"Topic does not exist: {topic_arn!r}")
            del self._topics[topic_arn]
            dropped = self._subscriptions.pop(topic_arn)
        logger.info("Deleted topic %s (%d subscriptions)", topic_arn, len(dropped))

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, topic: Topic | str, target: Queue | str) -> Subscription:
        """Attach *target* to *topic* and return the new subscription.

        *target* may be a ``Queue``, the ARN of a queue in the queue store,
        or an ``http://`` / ``https://`` URL.

        Raises
        ------
        TopicNotFoundError
            If *topic* is not registered.
        InvalidTargetError
            If *target* is not a known queue or a well-formed HTTP URL.
        """
        topic_arn = _arn_of(topic)
        kind, endpoint = self._classify_target(target)

        with self._lock:
            if topic_arn not in self._topics:
                raise TopicNotFoundError(f"Topic does not exist: {topic_arn!r}")
            subscription = Subscription(
                arn=self._ids.subscription_arn(topic_arn),
                topic_arn=topic_arn,
                target_kind=kind,
                endpoint=endpoint,
            )
            self._subscriptions[topic_arn].append(subscription)

        logger.info(
            "Subscribed %s endpoint %s to %s",
            subscription.protocol,
            endpoint,
            topic_arn,
        )
        return subscription

    def subscriptions_for(self, topic: Topic | str) -> tuple[Subscription, ...]:
        """Return a snapshot of *topic*'s subscriptions in insertion order.

        Unknown topics yield an empty snapshot.
        """
        with self._lock:
            return tuple(self._subscriptions.get(_arn_of(topic), ()))

    def list_subscriptions(self) -> list[Subscription]:
        with self._lock:
            return [s for subs in self._subscriptions.values() for s in subs]

    def reset(self) -> None:
        with self._lock:
            self._topics.clear()
            self._subscriptions.clear()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _classify_target(self, target: Queue | str) -> tuple[TargetKind, str]:
        if isinstance(target, Queue):
            return TargetKind.QUEUE, target.arn

        if not isinstance(target, str) or not target:
            raise InvalidTargetError(f"Unsupported subscription target: {target!r}")

        if target.startswith("arn:aws:sqs:"):
            if not self._queues.has_queue(target):
                raise InvalidTargetError(f"Queue does not exist: {target!r}")
            return TargetKind.QUEUE, target

        parsed = urlparse(target)
        if parsed.scheme in ("http", "https") and parsed.netloc:
            return TargetKind.HTTP, target

        raise InvalidTargetError(f"Unsupported subscription target: {target!r}")


def _arn_of(topic: Topic | str) -> str:
    return topic.arn if isinstance(topic, Topic) else topic
