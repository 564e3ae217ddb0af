"""Models for request outcomes and run summaries."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, TypeAlias

FailureReason: TypeAlias = Literal[
    "http_status",
    "invalid_json",
    "response_shape",
    "network_error",
]


@dataclass(frozen=True, kw_only=True)
class Outcome:
    """Classification of a single response, before timing is attached."""

    status: int | None = None
    reason: FailureReason | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


@dataclass(frozen=True, kw_only=True)
class RequestResult:
    """Result of a single request issued by a virtual user."""

    latency_ms: int
    status: int | None = None
    ok: bool
    reason: FailureReason | None = None


@dataclass(frozen=True, kw_only=True)
class Summary:
    """Aggregate statistics of a completed run."""

    total_requests: int
    success_requests: int
    failed_requests: int
    failure_rate: float
    avg_latency_ms: int
    p95_latency_ms: int
    throughput_rps: float
    duration_seconds: float
    status_counts: Mapping[str, int]
    failure_reasons: Mapping[str, int]
