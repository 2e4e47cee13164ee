"""HTTP adapter: POSTs the notification to an HTTP(S) subscription.

One request per delivery, no retries.  Transport errors and non-2xx
statuses become failed outcomes; the message is still considered drained.
"""

from __future__ import annotations

import logging

import httpx

from fakesns.models.delivery import DeliveryOutcome
from fakesns.models.envelopes import NotificationEnvelope
from fakesns.models.resources import Subscription, TargetKind

logger = logging.getLogger(__name__)

HEADER_MESSAGE_TYPE = "X-Amz-Sns-Message-Type"
HEADER_MESSAGE_ID = "X-Amz-Sns-Message-Id"
HEADER_TOPIC_ARN = "X-Amz-Sns-Topic-Arn"
HEADER_SUBSCRIPTION_ARN = "X-Amz-Sns-Subscription-Arn"


def build_headers(envelope: NotificationEnvelope, subscription: Subscription) -> dict[str, str]:
    """Return the SNS identification headers for one delivery."""
    return {
        "Content-Type": "application/json",
        HEADER_MESSAGE_TYPE: envelope.type,
        HEADER_MESSAGE_ID: envelope.message_id,
        HEADER_TOPIC_ARN: envelope.topic_arn,
        HEADER_SUBSCRIPTION_ARN: subscription.arn,
    }


class HttpAdapter:
    """Delivers notifications with a single HTTP POST.

    Parameters
    ----------
    client:
        The ``httpx.Client`` to send with.  It owns connection timeouts.
        When omitted, the adapter creates (and owns) a client with
        *timeout_seconds*.
    timeout_seconds:
        Timeout for the adapter-owned client.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout_seconds))

    @property
    def adapter_name(self) -> str:
        return "http"

    @property
    def target_kind(self) -> TargetKind:
        return TargetKind.HTTP

    def deliver(
        self, envelope: NotificationEnvelope, subscription: Subscription
    ) -> DeliveryOutcome:
        try:
            response = self._client.post(
                subscription.endpoint,
                content=envelope.to_json(),
                headers=build_headers(envelope, subscription),
            )
        except httpx.TimeoutException as exc:
            logger.warning(
                "HttpAdapter: timeout delivering %s to %s: %s",
                envelope.message_id,
                subscription.endpoint,
                exc,
            )
            return self._outcome(envelope, subscription, error=f"timeout: {exc}")
        except httpx.HTTPError as exc:
            logger.warning(
                "HttpAdapter: could not reach %s for %s: %s",
                subscription.endpoint,
                envelope.message_id,
                exc,
            )
            return self._outcome(envelope, subscription, error=str(exc))

        if not response.is_success:
            logger.warning(
                "HttpAdapter: %s answered %d for %s",
                subscription.endpoint,
                response.status_code,
                envelope.message_id,
            )
            return self._outcome(
                envelope,
                subscription,
                status_code=response.status_code,
                error=f"HTTP {response.status_code}",
            )

        logger.debug(
            "HttpAdapter: delivered %s to %s (%d)",
            envelope.message_id,
            subscription.endpoint,
            response.status_code,
        )
        return self._outcome(
            envelope, subscription, succeeded=True, status_code=response.status_code
        )

    def close(self) -> None:
        """Close the underlying client if this adapter created it."""
        if self._owns_client:
            self._client.close()

    @staticmethod
    def _outcome(
        envelope: NotificationEnvelope,
        subscription: Subscription,
        *,
        succeeded: bool = False,
        status_code: int | None = None,
        error: str | None = None,
    ) -> DeliveryOutcome:
        return DeliveryOutcome(
            message_id=envelope.message_id,
            subscription_arn=subscription.arn,
            protocol=subscription.protocol,
            endpoint=subscription.endpoint,
            succeeded=succeeded,
            status_code=status_code,
            error=error,
        )
