"""Models describing a load test run."""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import Field

from search_load_test.models.base import Model

DEFAULT_TARGET_URL = "http://localhost:8000/generate"
DEFAULT_HEADERS: Mapping[str, str] = {"Content-Type": "application/json"}


class TargetRequest(Model):
    """The request every virtual user sends."""

    url: str = Field(default=DEFAULT_TARGET_URL, description="Endpoint under test")
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = Field(
        default="POST", description="HTTP method"
    )
    headers: Mapping[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_HEADERS),
        description="Headers sent with every request",
    )
    body: Mapping[str, Any] = Field(
        default_factory=lambda: {"query": "a"},
        description="JSON body sent with every request",
    )


class SLAThresholds(Model):
    """Limits a passing run must stay within."""

    max_failure_rate: float = Field(
        default=0.02, ge=0.0, le=1.0, description="Allowed failure rate (0-1)"
    )
    max_p95_latency_ms: int = Field(
        default=1500, ge=0, description="Allowed P95 latency in milliseconds"
    )


class LoadTestConfig(Model):
    """Complete configuration of a single load test run.

    The virtual user count is deliberately unconstrained here; the harness
    validates it so that an out-of-range value surfaces as a
    ``ConfigurationError`` instead of a model validation error.
    """

    target: TargetRequest = Field(default_factory=TargetRequest)
    virtual_users: int = Field(default=50, description="Concurrent request streams")
    iterations_per_user: int = Field(
        default=50, ge=0, description="Sequential requests per virtual user"
    )
    thresholds: SLAThresholds = Field(default_factory=SLAThresholds)
    treat_non_2xx_as_failure: bool = Field(
        default=True,
        description="Fail on any non-2xx status instead of only on 5xx",
    )
    run_timeout: float = Field(
        default=300.0, gt=0, description="Wall-clock limit for the run in seconds"
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="Per-request timeout in seconds"
    )

    @property
    def expected_requests(self) -> int:
        """Number of requests a complete run issues."""
        return self.virtual_users * self.iterations_per_user
