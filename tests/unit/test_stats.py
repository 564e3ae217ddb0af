"""Tests for result aggregation."""

import pytest

from search_load_test.models.result import RequestResult
from search_load_test.stats import NETWORK_ERROR_KEY, percentile, summarize
from search_load_test.testing.factories import RequestResultFactory


class TestPercentile:
    """Tests for sorted-index percentile selection."""

    def test_returns_zero_for_empty_values(self) -> None:
        """An empty sample has a percentile of 0."""
        assert percentile([], 0.95) == 0

    def test_selects_sorted_index_without_interpolation(self) -> None:
        """Picks the value at floor(len * fraction) of the sorted sample."""
        values = [10 * i for i in range(100, 0, -1)]

        assert percentile(values, 0.95) == 960

    def test_clamps_index_to_last_value(self) -> None:
        """A fraction of 1.0 returns the largest value."""
        assert percentile([3, 1, 2], 1.0) == 3

    def test_single_value(self) -> None:
        """A single value is every percentile."""
        assert percentile([42], 0.95) == 42

    def test_small_sample(self) -> None:
        """With 10 values the P95 is the largest one."""
        assert percentile(list(range(1, 11)), 0.95) == 10


class TestSummarize:
    """Tests for summarize."""

    def test_all_successful(self) -> None:
        """Counts successes and computes latency statistics."""
        results = [
            RequestResultFactory.build(latency_ms=100, status=200) for _ in range(4)
        ]

        summary = summarize(results, duration_seconds=2.0)

        assert summary.total_requests == 4
        assert summary.success_requests == 4
        assert summary.failed_requests == 0
        assert summary.failure_rate == 0.0
        assert summary.avg_latency_ms == 100
        assert summary.p95_latency_ms == 100
        assert summary.throughput_rps == 2.0
        assert summary.status_counts == {"200": 4}
        assert summary.failure_reasons == {}

    def test_empty_run_fails_closed(self) -> None:
        """No requests means a failure rate of 1.0, not a division error."""
        summary = summarize([], duration_seconds=1.0)

        assert summary.total_requests == 0
        assert summary.failure_rate == 1.0
        assert summary.avg_latency_ms == 0
        assert summary.p95_latency_ms == 0
        assert summary.throughput_rps == 0.0

    def test_zero_duration_has_zero_throughput(self) -> None:
        """Throughput is 0 when no time elapsed."""
        summary = summarize([RequestResultFactory.build()], duration_seconds=0.0)

        assert summary.throughput_rps == 0.0

    def test_throughput_rounded_to_two_decimals(self) -> None:
        """Throughput keeps two decimals."""
        results = RequestResultFactory.batch(10)

        summary = summarize(results, duration_seconds=3.0)

        assert summary.throughput_rps == 3.33

    def test_average_rounds_half_up(self) -> None:
        """The average latency rounds .5 upwards."""
        results = [
            RequestResultFactory.build(latency_ms=100),
            RequestResultFactory.build(latency_ms=101),
        ]

        assert summarize(results, duration_seconds=1.0).avg_latency_ms == 101

    def test_counts_statuses_and_failure_reasons(self) -> None:
        """Builds status and failure reason histograms."""
        results = [
            RequestResult(latency_ms=10, status=200, ok=True),
            RequestResult(latency_ms=20, status=200, ok=False, reason="response_shape"),
            RequestResult(latency_ms=30, status=500, ok=False, reason="http_status"),
            RequestResult(latency_ms=40, status=None, ok=False, reason="network_error"),
            RequestResult(latency_ms=50, status=None, ok=False, reason="network_error"),
        ]

        summary = summarize(results, duration_seconds=1.0)

        assert summary.total_requests == 5
        assert summary.success_requests == 1
        assert summary.failed_requests == 4
        assert summary.failure_rate == pytest.approx(0.8)
        assert summary.status_counts == {"200": 2, "500": 1, NETWORK_ERROR_KEY: 2}
        assert summary.failure_reasons == {
            "response_shape": 1,
            "http_status": 1,
            "network_error": 2,
        }

    def test_p95_of_hundred_latencies(self) -> None:
        """P95 over 10..1000 is the 96th smallest latency."""
        results = [
            RequestResultFactory.build(latency_ms=10 * i) for i in range(1, 101)
        ]

        summary = summarize(results, duration_seconds=1.0)

        assert summary.p95_latency_ms == 960
        assert summary.avg_latency_ms == 505

    def test_success_and_failed_add_up(self) -> None:
        """Success and failed counts always add up to the total."""
        results = [
            *RequestResultFactory.batch(7),
            *RequestResultFactory.batch(3, ok=False, reason="invalid_json"),
        ]

        summary = summarize(results, duration_seconds=1.0)

        assert summary.success_requests + summary.failed_requests == 10
        assert summary.failure_reasons == {"invalid_json": 3}
