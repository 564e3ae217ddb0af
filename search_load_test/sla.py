"""SLA evaluation of a completed run."""

from search_load_test.errors import SLAViolation
from search_load_test.models.config import SLAThresholds
from search_load_test.models.result import Summary


def evaluate_sla(summary: Summary, thresholds: SLAThresholds) -> None:
    """Check the summary against the thresholds.

    Raises:
        SLAViolation: Listing every threshold the run exceeded

    """
    violations: list[str] = []

    if summary.failure_rate > thresholds.max_failure_rate:
        violations.append(
            f"Failure rate {summary.failure_rate} exceeded "
            f"{thresholds.max_failure_rate}"
        )

    if summary.p95_latency_ms > thresholds.max_p95_latency_ms:
        violations.append(
            f"P95 latency {summary.p95_latency_ms}ms exceeded "
            f"{thresholds.max_p95_latency_ms}ms"
        )

    if violations:
        raise SLAViolation(violations)
