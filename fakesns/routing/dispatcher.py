"""DeliveryDispatcher: routes each notification to its target-kind adapter.

Every delivery dispatched through this module yields a ``DeliveryOutcome``.
Adapter exceptions are logged and recorded as failed outcomes; they never
propagate, so a failing subscriber cannot fail a drain or block its
siblings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fakesns.models.delivery import DeliveryOutcome
from fakesns.models.envelopes import NotificationEnvelope
from fakesns.models.resources import Subscription, TargetKind

if TYPE_CHECKING:
    from fakesns.routing.adapters import DeliveryAdapter

logger = logging.getLogger(__name__)


class DeliveryDispatcher:
    """Selects the adapter for a subscription's target kind and calls it.

    Usage
    -----
    >>> dispatcher = DeliveryDispatcher()
    >>> dispatcher.register_adapter(QueueAdapter(queues))
    >>> dispatcher.register_adapter(HttpAdapter())
    >>> dispatcher.dispatch(envelope, subscription)
    """

    def __init__(self) -> None:
        self._adapters: dict[TargetKind, DeliveryAdapter] = {}

    # ------------------------------------------------------------------
    # Adapter management
    # ------------------------------------------------------------------

    def register_adapter(self, adapter: DeliveryAdapter) -> None:
        """Register *adapter* for its target kind, replacing any previous one."""
        self._adapters[adapter.target_kind] = adapter
        logger.info(
            "Registered %s adapter for %s targets",
            adapter.adapter_name,
            adapter.target_kind.value,
        )

    def adapter_for(self, kind: TargetKind) -> DeliveryAdapter | None:
        return self._adapters.get(kind)

    @property
    def registered_adapters(self) -> list[DeliveryAdapter]:
        """Return a copy of the registered adapter list."""
        return list(self._adapters.values())

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(
        self, envelope: NotificationEnvelope, subscription: Subscription
    ) -> DeliveryOutcome:
        """Deliver *envelope* to *subscription*; never raises."""
        adapter = self._adapters.get(subscription.target_kind)
        if adapter is None:
            logger.error(
                "No adapter registered for %s targets; message %s not delivered to %s",
                subscription.target_kind.value,
                envelope.message_id,
                subscription.arn,
            )
            return _failed(envelope, subscription, "no adapter registered")

        try:
            return adapter.deliver(envelope, subscription)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Adapter %s failed for message %s -> %s: %s",
                adapter.adapter_name,
                envelope.message_id,
                subscription.arn,
                exc,
            )
            return _failed(envelope, subscription, str(exc))


def _failed(
    envelope: NotificationEnvelope, subscription: Subscription, error: str
) -> DeliveryOutcome:
    return DeliveryOutcome(
        message_id=envelope.message_id,
        subscription_arn=subscription.arn,
        protocol=subscription.protocol,
        endpoint=subscription.endpoint,
        succeeded=False,
        error=error,
    )
