"""Exception hierarchy for the simulated notification service.

Usage errors are raised straight to the caller of the registry or queue
operation.  Delivery errors never escape a drain; see
``fakesns.routing.dispatcher``.
"""

from __future__ import annotations


class FakeSnsError(Exception):
    """Base class for every error raised by fakesns."""


class InvalidParameterError(FakeSnsError, ValueError):
    """Raised when an argument is syntactically invalid (e.g. a topic name)."""


class DuplicateTopicError(FakeSnsError):
    """Raised when creating a topic whose name is already taken."""


class TopicNotFoundError(FakeSnsError):
    """Raised when a topic ARN does not resolve to a known topic."""


class InvalidTargetError(InvalidParameterError):
    """Raised when subscribing with a target that is neither a queue nor an HTTP URL."""


class QueueAlreadyExistsError(FakeSnsError):
    """Raised when creating a queue whose name is already taken."""


class QueueDoesNotExistError(FakeSnsError):
    """Raised when a queue name, ARN or URL does not resolve to a queue."""
