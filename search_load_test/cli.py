"""CLI entry point for the generate endpoint load test."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from search_load_test.errors import ConfigurationError, RunTimeoutError, SLAViolation
from search_load_test.harness import LoadTestHarness, validate_config
from search_load_test.report import build_report, log_summary, write_report
from search_load_test.settings import LoadTestSettings, load_settings
from search_load_test.sla import evaluate_sla
from search_load_test.targets.http import HttpTarget

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2


async def run(settings: LoadTestSettings) -> int:
    """Run the load test and return exit code."""
    log = logging.getLogger("search_load_test")

    try:
        config = settings.to_config()
        validate_config(config)
    except ConfigurationError as e:
        log.error("%s", e)
        return EXIT_CONFIG_ERROR

    try:
        async with HttpTarget.from_config(config) as target:
            harness = LoadTestHarness(target=target)
            summary = await harness.run(config)
    except RunTimeoutError as e:
        log.error("%s", e)
        return EXIT_FAILED

    log_summary(log, config, summary)

    if settings.report_dir is not None:
        try:
            text_path, json_path = write_report(settings.report_dir, config, summary)
        except OSError as e:
            log.error("Failed to write reports to %s: %s", settings.report_dir, e)
        else:
            log.info("Reports written: %s, %s", text_path, json_path)

    print(json.dumps(build_report(config, summary), indent=2))

    try:
        evaluate_sla(summary, config.thresholds)
    except SLAViolation as e:
        for violation in e.violations:
            log.error("SLA violated: %s", violation)
        return EXIT_FAILED

    log.info("SLA passed")
    return EXIT_OK


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load test the search generate endpoint with concurrent users"
    )
    parser.add_argument("--url", help="Target endpoint (LOAD_TARGET_URL)")
    parser.add_argument("--query", help="Search query sent in the body (LOAD_QUERY)")
    parser.add_argument(
        "--concurrency",
        type=int,
        help="Virtual users, between 50 and 100 (LOAD_CONCURRENCY)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        help="Requests per virtual user (LOAD_ITERATIONS)",
    )
    parser.add_argument(
        "--p95-ms",
        type=int,
        help="Allowed P95 latency in milliseconds (LOAD_P95_MS)",
    )
    parser.add_argument(
        "--max-failure-rate",
        type=float,
        help="Allowed failure rate between 0 and 1 (LOAD_MAX_FAILURE_RATE)",
    )
    parser.add_argument(
        "--fail-on-non-2xx",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Count any non-2xx status as a failure (LOAD_FAIL_ON_NON_2XX)",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        help="Wall-clock limit for the run (LOAD_TEST_TIMEOUT_MS)",
    )
    parser.add_argument(
        "--request-timeout-ms",
        type=int,
        help="Per-request timeout (LOAD_REQUEST_TIMEOUT_MS)",
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        help="Directory for the text and JSON summaries (LOAD_REPORT_DIR)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = load_settings(
            target_url=args.url,
            query=args.query,
            concurrency=args.concurrency,
            iterations=args.iterations,
            p95_ms=args.p95_ms,
            max_failure_rate=args.max_failure_rate,
            fail_on_non_2xx=args.fail_on_non_2xx,
            test_timeout_ms=args.timeout_ms,
            request_timeout_ms=args.request_timeout_ms,
            report_dir=args.report_dir,
        )
    except ConfigurationError as e:
        logging.getLogger("search_load_test").error("%s", e)
        sys.exit(EXIT_CONFIG_ERROR)

    sys.exit(asyncio.run(run(settings)))


if __name__ == "__main__":  # pragma: no cover
    main()
