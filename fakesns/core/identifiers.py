"""Identifier generation and ARN formatting.

ARNs are purely cosmetic: nothing in the engine parses them except the
queue store, which resolves its own queue ARNs back to queues.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable


class IdentifierGenerator:
    """Produces unique ids and formats ARNs / queue URLs.

    Parameters
    ----------
    region:
        Region embedded in every ARN.
    account_id:
        Account id embedded in every ARN and queue URL.
    queue_url_base:
        Scheme + host prefix for queue URLs.
    id_factory:
        Callable returning a fresh unique string.  Defaults to uuid4; tests
        may pass a deterministic counter.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        account_id: str = "123456789012",
        queue_url_base: str = "http://localhost:4568",
        *,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._region = region
        self._account_id = account_id
        self._queue_url_base = queue_url_base.rstrip("/")
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

    @property
    def region(self) -> str:
        return self._region

    @property
    def account_id(self) -> str:
        return self._account_id

    def new_id(self) -> str:
        """Return a fresh unique identifier."""
        return self._id_factory()

    def topic_arn(self, name: str) -> str:
        return f"arn:aws:sns:{self._region}:{self._account_id}:{name}"

    def subscription_arn(self, topic_arn: str) -> str:
        return f"{topic_arn}:{self.new_id()}"

    def queue_arn(self, name: str) -> str:
        return f"arn:aws:sqs:{self._region}:{self._account_id}:{name}"

    def queue_url(self, name: str) -> str:
        return f"{self._queue_url_base}/{self._account_id}/{name}"
