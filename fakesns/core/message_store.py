"""Message store: published messages waiting for a drain.

Messages live in an arena keyed by message id; each topic keeps an index
list of the ids still pending, in publish order.  ``mark_delivered``
drops both entries, which is what makes a repeated drain a no-op.
"""

from __future__ import annotations

import logging
import threading

from fakesns.core.identifiers import IdentifierGenerator
from fakesns.models.resources import Message, Topic

logger = logging.getLogger(__name__)


class MessageStore:
    """Arena + per-topic index of pending messages."""

    def __init__(self, identifiers: IdentifierGenerator) -> None:
        self._ids = identifiers
        self._lock = threading.Lock()
        self._arena: dict[str, Message] = {}
        self._index: dict[str, list[str]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._arena)

    def publish(self, topic: Topic | str, body: str, subject: str | None = None) -> str:
        """Append a new pending message to *topic* and return its id.

        Identical bodies still produce distinct messages.
        """
        topic_arn = _arn_of(topic)
        message = Message(
            message_id=self._ids.new_id(),
            topic_arn=topic_arn,
            body=body,
            subject=subject,
        )
        with self._lock:
            self._arena[message.message_id] = message
            self._index.setdefault(topic_arn, []).append(message.message_id)
        logger.debug("Published %s to %s", message.message_id, topic_arn)
        return message.message_id

    def pending_for(
        self, topic: Topic | str, message_id: str | None = None
    ) -> tuple[Message, ...]:
        """Return the pending messages of *topic* in publish order.

        With *message_id*, return only that message, or an empty tuple if
        it is not pending on *topic*.
        """
        topic_arn = _arn_of(topic)
        with self._lock:
            ids = self._index.get(topic_arn, [])
            if message_id is not None:
                return (self._arena[message_id],) if message_id in ids else ()
            return tuple(self._arena[mid] for mid in ids)

    def topic_of(self, message_id: str) -> str | None:
        """Return the topic ARN of a pending message, or None."""
        with self._lock:
            message = self._arena.get(message_id)
            return message.topic_arn if message else None

    def topics_with_pending(self) -> list[str]:
        """ARNs of every topic holding at least one pending message."""
        with self._lock:
            return [arn for arn, ids in self._index.items() if ids]

    def mark_delivered(self, message: Message) -> bool:
        """Remove *message* from the pending store.

        Returns False if it was already gone.
        """
        with self._lock:
            if self._arena.pop(message.message_id, None) is None:
                return False
            ids = self._index.get(message.topic_arn)
            if ids is not None:
                ids.remove(message.message_id)
                if not ids:
                    del self._index[message.topic_arn]
        return True

    def discard_topic(self, topic: Topic | str) -> int:
        """Drop every pending message of *topic*; return how many were dropped."""
        topic_arn = _arn_of(topic)
        with self._lock:
            ids = self._index.pop(topic_arn, [])
            for mid in ids:
                del self._arena[mid]
        if ids:
            logger.info("Discarded %d pending messages of %s", len(ids), topic_arn)
        return len(ids)

    def reset(self) -> None:
        with self._lock:
            self._arena.clear()
            self._index.clear()


def _arn_of(topic: Topic | str) -> str:
    return topic.arn if isinstance(topic, Topic) else topic
