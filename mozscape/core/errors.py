"""Errors raised by :class:`~mozscape.workers.client.MetricsClient`.

The hierarchy is closed: every failure of a lookup is one of the four
subclasses of :class:`MetricsError`, so callers can branch with ``except``
clauses instead of inspecting messages.
"""

from __future__ import annotations


class MetricsError(Exception):
    """Base class for every lookup failure."""


class TransportError(MetricsError):
    """The request could not be sent or its response body could not be read.

    The underlying httpx exception is available as ``__cause__``.
    """


class DecodeError(MetricsError):
    """The response body matched none of the expected shapes.

    ``body`` holds the raw response text so callers can decide whether to
    surface it; the parse failure is available as ``__cause__``.
    """

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class TooManyRequestsError(MetricsError):
    """The service reported status ``429``: the account quota is exhausted."""

    def __init__(self) -> None:
        super().__init__("Too many requests")


class ServiceError(MetricsError):
    """Any other application-level error reported in an error envelope."""

    def __init__(self, status: str, message: str = "") -> None:
        super().__init__(f"Status: {status}, Message: {message}")
        self.status = status
        self.message = message
