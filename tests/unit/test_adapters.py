"""Unit tests for the queue and HTTP delivery adapters."""

from __future__ import annotations

import json

import httpx
import pytest

from fakesns.core.errors import QueueDoesNotExistError
from fakesns.core.identifiers import IdentifierGenerator
from fakesns.core.queues import QueueStore
from fakesns.core.renderer import render_envelope
from fakesns.models.resources import TargetKind
from fakesns.routing.adapters import DeliveryAdapter
from fakesns.routing.adapters.http import HttpAdapter
from fakesns.routing.adapters.queue import QueueAdapter


@pytest.fixture
def queues(identifiers: IdentifierGenerator) -> QueueStore:
    return QueueStore(identifiers)


@pytest.fixture
def envelope(make_topic, make_message, make_subscription):
    topic = make_topic()
    return render_envelope(topic, make_message(topic_arn=topic.arn), make_subscription())


class TestQueueAdapter:
    """QueueAdapter must enqueue the envelope JSON."""

    def test_satisfies_protocol(self, queues: QueueStore):
        assert isinstance(QueueAdapter(queues), DeliveryAdapter)

    def test_enqueues_flat_notification(self, queues, envelope, make_subscription):
        queue = queues.create_queue("my-queue")
        sub = make_subscription(endpoint=queue.arn, target_kind=TargetKind.QUEUE)

        outcome = QueueAdapter(queues).deliver(envelope, sub)

        assert outcome.succeeded is True
        assert outcome.protocol == "sqs"
        (entry,) = queues.peek(queue)
        assert json.loads(entry.body) == envelope.to_wire()

    def test_missing_queue_raises(self, queues, envelope, make_subscription):
        sub = make_subscription(
            endpoint="arn:aws:sqs:us-east-1:123456789012:gone",
            target_kind=TargetKind.QUEUE,
        )
        with pytest.raises(QueueDoesNotExistError):
            QueueAdapter(queues).deliver(envelope, sub)


class TestHttpAdapter:
    """HttpAdapter must POST the envelope and report failures as outcomes."""

    def test_satisfies_protocol(self, http_client):
        assert isinstance(HttpAdapter(http_client), DeliveryAdapter)

    def test_posts_body_and_headers(self, http_client, endpoint, envelope, make_subscription):
        sub = make_subscription()

        outcome = HttpAdapter(http_client).deliver(envelope, sub)

        assert outcome.succeeded is True
        assert outcome.status_code == 200
        (request,) = endpoint.requests
        assert request.method == "POST"
        assert str(request.url) == sub.endpoint
        assert json.loads(request.content) == envelope.to_wire()
        assert request.headers["x-amz-sns-message-type"] == "Notification"
        assert request.headers["x-amz-sns-message-id"] == envelope.message_id
        assert request.headers["x-amz-sns-topic-arn"] == envelope.topic_arn
        assert request.headers["x-amz-sns-subscription-arn"] == sub.arn

    def test_non_success_status_is_failure(self, http_client, endpoint, envelope, make_subscription):
        endpoint.status_code = 500

        outcome = HttpAdapter(http_client).deliver(envelope, make_subscription())

        assert outcome.succeeded is False
        assert outcome.status_code == 500
        assert len(endpoint.requests) == 1

    def test_connection_refused_is_failure(self, http_client, endpoint, envelope, make_subscription):
        sub = make_subscription(endpoint="http://unreachable.invalid/hook")
        endpoint.refuse.add(sub.endpoint)

        outcome = HttpAdapter(http_client).deliver(envelope, sub)

        assert outcome.succeeded is False
        assert outcome.error
        assert endpoint.requests == []

    def test_timeout_is_failure(self, envelope, make_subscription):
        def _timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        with httpx.Client(transport=httpx.MockTransport(_timeout)) as client:
            outcome = HttpAdapter(client).deliver(envelope, make_subscription())

        assert outcome.succeeded is False
        assert outcome.error.startswith("timeout")

    def test_close_leaves_injected_client_open(self, http_client):
        HttpAdapter(http_client).close()
        assert http_client.is_closed is False
