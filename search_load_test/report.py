"""Human-readable and JSON reports of a load test run."""

import json
import logging
from pathlib import Path
from typing import Any

from search_load_test.models.config import LoadTestConfig
from search_load_test.models.result import Summary

TEXT_REPORT_NAME = "load-test-summary.txt"
JSON_REPORT_NAME = "load-test-summary.json"


def build_report(config: LoadTestConfig, summary: Summary) -> dict[str, Any]:
    """Build the machine-readable summary of a run."""
    return {
        "target": {
            "url": config.target.url,
            "method": config.target.method,
            "body": dict(config.target.body),
        },
        "concurrency": config.virtual_users,
        "iterations_per_user": config.iterations_per_user,
        "total_requests": summary.total_requests,
        "success_requests": summary.success_requests,
        "failed_requests": summary.failed_requests,
        "failure_rate": summary.failure_rate,
        "failure_rate_percent": round(summary.failure_rate * 100, 2),
        "avg_latency_ms": summary.avg_latency_ms,
        "p95_latency_ms": summary.p95_latency_ms,
        "throughput_rps": summary.throughput_rps,
        "duration_seconds": round(summary.duration_seconds, 3),
        "status_counts": dict(summary.status_counts),
        "failure_reasons": dict(summary.failure_reasons),
        "thresholds": {
            "max_failure_rate": config.thresholds.max_failure_rate,
            "p95_threshold_ms": config.thresholds.max_p95_latency_ms,
            "fail_on_non_2xx": config.treat_non_2xx_as_failure,
        },
    }


def format_text_summary(config: LoadTestConfig, summary: Summary) -> str:
    """Format the run summary for humans, one fact per line."""
    thresholds = config.thresholds
    return "\n".join(
        [
            "Load Test Result Summary",
            f"Endpoint: {config.target.url}",
            f"Method: {config.target.method}",
            f"Concurrency (virtual users): {config.virtual_users}",
            f"Iterations per user: {config.iterations_per_user}",
            f"Total requests: {summary.total_requests}",
            f"Successful requests: {summary.success_requests}",
            f"Failed requests: {summary.failed_requests}",
            f"Failure rate: {summary.failure_rate * 100:.2f}% "
            f"(allowed <= {thresholds.max_failure_rate * 100:.2f}%)",
            f"Average latency: {summary.avg_latency_ms} ms",
            f"P95 latency: {summary.p95_latency_ms} ms "
            f"(allowed <= {thresholds.max_p95_latency_ms} ms)",
            f"Throughput: {summary.throughput_rps} req/sec",
            f"Status counts: {json.dumps(dict(summary.status_counts))}",
            f"Failure reasons: {json.dumps(dict(summary.failure_reasons))}",
        ]
    )


def write_report(
    report_dir: Path, config: LoadTestConfig, summary: Summary
) -> tuple[Path, Path]:
    """Write the text and JSON summaries into ``report_dir``.

    Returns:
        Paths of the text and JSON files

    """
    report_dir.mkdir(parents=True, exist_ok=True)

    text_path = report_dir / TEXT_REPORT_NAME
    text_path.write_text(format_text_summary(config, summary) + "\n", encoding="utf-8")

    json_path = report_dir / JSON_REPORT_NAME
    json_path.write_text(
        json.dumps(build_report(config, summary), indent=2) + "\n", encoding="utf-8"
    )

    return text_path, json_path


def log_summary(log: logging.Logger, config: LoadTestConfig, summary: Summary) -> None:
    """Log a formatted summary of the run."""
    log.info("=" * 80)
    for line in format_text_summary(config, summary).splitlines():
        log.info("%s", line)
    log.info("=" * 80)
