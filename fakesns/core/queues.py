"""In-process queue store: the write target of queue subscriptions.

Stands in for a fake SQS: named queues, each an in-memory deque of
``QueueEntry`` objects.  Entries stay *visible* until received.  Every
operation takes the store lock, so concurrent deliveries from a drain can
enqueue safely.
"""

from __future__ import annotations

import collections
import logging
import threading

from fakesns.core.errors import QueueAlreadyExistsError, QueueDoesNotExistError
from fakesns.core.hasher import md5_hex
from fakesns.core.identifiers import IdentifierGenerator
from fakesns.models.resources import Queue, QueueEntry

logger = logging.getLogger(__name__)


class QueueStore:
    """Named in-memory queues keyed by name.

    Queues can be looked up by name, ARN or URL so a subscription only
    needs to remember the queue ARN.
    """

    def __init__(self, identifiers: IdentifierGenerator) -> None:
        self._ids = identifiers
        self._lock = threading.Lock()
        self._queues: dict[str, Queue] = {}
        self._entries: dict[str, collections.deque[QueueEntry]] = {}

    # ------------------------------------------------------------------
    # Queue management
    # ------------------------------------------------------------------

    def create_queue(self, name: str) -> Queue:
        """Create an empty queue.

        Raises
        ------
        QueueAlreadyExistsError
            If a queue with *name* already exists.
        """
        with self._lock:
            if name in self._queues:
                raise QueueAlreadyExistsError(f"Queue already exists: {name!r}")
            queue = Queue(
                name=name,
                arn=self._ids.queue_arn(name),
                url=self._ids.queue_url(name),
            )
            self._queues[name] = queue
            self._entries[name] = collections.deque()
        logger.info("Created queue %s", queue.arn)
        return queue

    def delete_queue(self, queue: Queue | str) -> None:
        """Delete a queue and everything in it."""
        with self._lock:
            name = self._resolve(queue).name
            del self._queues[name]
            del self._entries[name]
        logger.info("Deleted queue %s", name)

    def get_queue(self, ref: str) -> Queue:
        """Resolve a queue name, ARN or URL."""
        with self._lock:
            return self._resolve(ref)

    def has_queue(self, ref: str) -> bool:
        with self._lock:
            try:
                self._resolve(ref)
            except QueueDoesNotExistError:
                return False
            return True

    def list_queues(self) -> list[Queue]:
        with self._lock:
            return list(self._queues.values())

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def enqueue(self, queue: Queue | str, body: str) -> QueueEntry:
        """Append a new visible entry to *queue* and return it."""
        entry = QueueEntry(
            message_id=self._ids.new_id(),
            body=body,
            md5_of_body=md5_hex(body),
        )
        with self._lock:
            name = self._resolve(queue).name
            self._entries[name].append(entry)
        logger.debug("Enqueued %s on %s", entry.message_id, name)
        return entry

    def visible_messages(self, queue: Queue | str) -> int:
        """Number of entries currently visible in *queue*."""
        with self._lock:
            return len(self._entries[self._resolve(queue).name])

    def peek(self, queue: Queue | str) -> list[QueueEntry]:
        """Return the visible entries without removing them."""
        with self._lock:
            return list(self._entries[self._resolve(queue).name])

    def receive(self, queue: Queue | str, *, max_messages: int = 1) -> list[QueueEntry]:
        """Remove and return up to *max_messages* entries, oldest first."""
        with self._lock:
            entries = self._entries[self._resolve(queue).name]
            received: list[QueueEntry] = []
            while entries and len(received) < max_messages:
                received.append(entries.popleft())
            return received

    def reset(self) -> None:
        """Drop every queue."""
        with self._lock:
            self._queues.clear()
            self._entries.clear()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _resolve(self, ref: Queue | str) -> Queue:
        # Caller holds the lock.
        if isinstance(ref, Queue):
            ref = ref.name
        if ref in self._queues:
            return self._queues[ref]
        for queue in self._queues.values():
            if ref in (queue.arn, queue.url):
                return queue
        raise QueueDoesNotExistError(f"Queue does not exist: {ref!r}")
