"""Shared test fixtures for fakesns."""

from __future__ import annotations

import itertools
import json
from collections.abc import Callable, Iterator

import httpx
import pytest

from fakesns.config import SnsSettings
from fakesns.core.context import SnsContext
from fakesns.core.identifiers import IdentifierGenerator
from fakesns.models.resources import Message, Subscription, TargetKind, Topic


class RecordingEndpoint:
    """httpx.MockTransport handler that records every request it receives.

    ``status_code`` controls the response; URLs listed in ``refuse`` raise
    ``httpx.ConnectError`` as an unreachable host would.
    """

    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.refuse: set[str] = set()
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) in self.refuse:
            raise httpx.ConnectError("Connection refused", request=request)
        self.requests.append(request)
        return httpx.Response(self.status_code)

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def settings() -> SnsSettings:
    """Settings pinned to known values regardless of the environment."""
    return SnsSettings(
        region="us-east-1",
        account_id="123456789012",
        queue_url_base="http://localhost:4568",
        http_timeout_seconds=1.0,
        max_delivery_workers=4,
    )


@pytest.fixture
def endpoint() -> RecordingEndpoint:
    return RecordingEndpoint()


@pytest.fixture
def http_client(endpoint: RecordingEndpoint) -> Iterator[httpx.Client]:
    with httpx.Client(transport=httpx.MockTransport(endpoint)) as client:
        yield client


@pytest.fixture
def ctx(settings: SnsSettings, http_client: httpx.Client) -> Iterator[SnsContext]:
    """A fresh SnsContext whose HTTP deliveries hit the recording endpoint."""
    context = SnsContext(settings, http_client=http_client)
    yield context
    context.close()


@pytest.fixture
def identifiers() -> IdentifierGenerator:
    """Deterministic identifiers: id-1, id-2, ..."""
    counter = itertools.count(1)
    return IdentifierGenerator(id_factory=lambda: f"id-{next(counter)}")


# ---------------------------------------------------------------------------
# Model factories: shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_topic() -> Callable[..., Topic]:
    def _factory(name: str = "my-topic") -> Topic:
        return Topic(arn=f"arn:aws:sns:us-east-1:123456789012:{name}", name=name)

    return _factory


@pytest.fixture
def make_message() -> Callable[..., Message]:
    def _factory(
        body: str = "X",
        message_id: str = "msg-1",
        topic_arn: str = "arn:aws:sns:us-east-1:123456789012:my-topic",
        subject: str | None = None,
    ) -> Message:
        return Message(message_id=message_id, topic_arn=topic_arn, body=body, subject=subject)

    return _factory


@pytest.fixture
def make_subscription() -> Callable[..., Subscription]:
    def _factory(
        endpoint: str = "http://localhost:5051/endpoint",
        target_kind: TargetKind = TargetKind.HTTP,
        topic_arn: str = "arn:aws:sns:us-east-1:123456789012:my-topic",
    ) -> Subscription:
        return Subscription(
            arn=f"{topic_arn}:sub-1",
            topic_arn=topic_arn,
            target_kind=target_kind,
            endpoint=endpoint,
        )

    return _factory
