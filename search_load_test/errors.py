"""Exceptions raised while configuring, running and judging a load test."""

from collections.abc import Sequence
from typing import ClassVar

from search_load_test.models.result import FailureReason


class LoadTestError(Exception):
    """Base class for load test errors."""


class ConfigurationError(LoadTestError):
    """Raised when the run configuration is invalid, before any request."""


class RequestError(LoadTestError):
    """Failure of a single request.

    Never escapes a target: it is recorded as an outcome carrying ``reason``.
    """

    reason: ClassVar[FailureReason]


class NetworkError(RequestError):
    """No response was received (connection error or timeout)."""

    reason = "network_error"


class ProtocolError(RequestError):
    """The status code does not satisfy the status policy."""

    reason = "http_status"


class DecodeError(RequestError):
    """The response body is not valid JSON."""

    reason = "invalid_json"


class ContractError(RequestError):
    """The JSON body does not match the expected response shape."""

    reason = "response_shape"


class RunTimeoutError(LoadTestError):
    """Raised when the whole run exceeds its wall-clock limit."""

    def __init__(self, timeout: float, completed: int, expected: int) -> None:
        super().__init__(
            f"Load test did not complete within {timeout} seconds "
            f"({completed}/{expected} requests completed)"
        )
        self.timeout = timeout
        self.completed = completed
        self.expected = expected


class SLAViolation(LoadTestError):
    """Raised when a completed run breaks one or more SLA thresholds."""

    def __init__(self, violations: Sequence[str]) -> None:
        super().__init__("; ".join(violations))
        self.violations = tuple(violations)
