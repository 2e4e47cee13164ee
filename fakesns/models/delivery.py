"""Delivery bookkeeping: what happened during a drain."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DeliveryOutcome(BaseModel):
    """Result of handing one envelope to one subscription."""

    model_config = ConfigDict(frozen=True)

    message_id: str
    subscription_arn: str
    protocol: str
    endpoint: str
    succeeded: bool
    status_code: int | None = None
    error: str | None = None


class DrainReport(BaseModel):
    """Summary of a single drain call.

    ``drained_message_ids`` lists every message removed from the pending
    store, including those on topics with no subscribers.
    """

    model_config = ConfigDict(frozen=True)

    drained_message_ids: list[str] = []
    outcomes: list[DeliveryOutcome] = []

    @property
    def delivered(self) -> list[DeliveryOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> list[DeliveryOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def is_empty(self) -> bool:
        """True when the drain found nothing pending."""
        return not self.drained_message_ids
