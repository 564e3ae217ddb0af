"""Aggregation of request results into a run summary."""

import math
from collections import Counter
from collections.abc import Sequence

from search_load_test.models.result import RequestResult, Summary

NETWORK_ERROR_KEY = "NETWORK_ERROR"


def percentile(values: Sequence[int], fraction: float) -> int:
    """Return the value at sorted index ``floor(len * fraction)``.

    The index is clamped to the last element and no interpolation is done.
    An empty sequence yields 0.
    """
    if not values:
        return 0
    ordered = sorted(values)
    index = min(len(ordered) - 1, math.floor(len(ordered) * fraction))
    return ordered[index]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def summarize(results: Sequence[RequestResult], duration_seconds: float) -> Summary:
    """Compute the aggregate statistics of a completed run.

    A run without any request has a failure rate of 1.0 so that it can
    never pass an SLA check.
    """
    total = len(results)
    failed = sum(1 for result in results if not result.ok)
    latencies = [result.latency_ms for result in results]

    failure_rate = failed / total if total else 1.0
    throughput = round(total / duration_seconds, 2) if duration_seconds > 0 else 0.0

    status_counts = Counter(
        str(result.status) if result.status is not None else NETWORK_ERROR_KEY
        for result in results
    )
    failure_reasons = Counter(
        result.reason for result in results if result.reason is not None
    )

    return Summary(
        total_requests=total,
        success_requests=total - failed,
        failed_requests=failed,
        failure_rate=failure_rate,
        avg_latency_ms=round_half_up(sum(latencies) / max(len(latencies), 1)),
        p95_latency_ms=percentile(latencies, 0.95),
        throughput_rps=throughput,
        duration_seconds=duration_seconds,
        status_counts=dict(status_counts),
        failure_reasons=dict(failure_reasons),
    )
