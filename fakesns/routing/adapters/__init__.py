"""Delivery adapter protocol.

All adapters implement the ``DeliveryAdapter`` protocol: an
``adapter_name`` and ``target_kind`` property and a ``deliver`` method.
The dispatcher calls ``deliver`` once per (message, subscription) pair.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fakesns.models.delivery import DeliveryOutcome
from fakesns.models.envelopes import NotificationEnvelope
from fakesns.models.resources import Subscription, TargetKind


@runtime_checkable
class DeliveryAdapter(Protocol):
    """Protocol that every delivery adapter must implement.

    Attributes
    ----------
    adapter_name : str
        Human-readable identifier used in logs (e.g. ``"queue"``).
    target_kind : TargetKind
        The subscription target kind this adapter serves.
    """

    @property
    def adapter_name(self) -> str:
        ...

    @property
    def target_kind(self) -> TargetKind:
        ...

    def deliver(
        self, envelope: NotificationEnvelope, subscription: Subscription
    ) -> DeliveryOutcome:
        """Hand *envelope* to the destination named by *subscription*.

        Expected failures (unreachable endpoint, bad status) should be
        reported through the returned outcome.  Anything raised is caught
        by the dispatcher and recorded as a failed outcome.
        """
        ...
