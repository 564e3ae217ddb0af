"""Load test harness driving concurrent virtual users against a target."""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from search_load_test.errors import ConfigurationError, RunTimeoutError
from search_load_test.models.config import LoadTestConfig
from search_load_test.models.result import RequestResult, Summary
from search_load_test.stats import summarize
from search_load_test.targets.base import Target

log = logging.getLogger(__name__)

MIN_VIRTUAL_USERS = 50
MAX_VIRTUAL_USERS = 100


def validate_config(config: LoadTestConfig) -> None:
    """Reject configurations that must not start a run.

    Raises:
        ConfigurationError: If the virtual user count is outside
            [MIN_VIRTUAL_USERS, MAX_VIRTUAL_USERS]

    """
    if not MIN_VIRTUAL_USERS <= config.virtual_users <= MAX_VIRTUAL_USERS:
        raise ConfigurationError(
            f"Concurrency must be between {MIN_VIRTUAL_USERS} and "
            f"{MAX_VIRTUAL_USERS}. Received: {config.virtual_users}"
        )


@dataclass(frozen=True, kw_only=True)
class LoadTestHarness:
    """Runs a fixed volume of requests and aggregates the outcome."""

    target: Target
    clock: Callable[[], float] = field(default=time.perf_counter, repr=False)

    async def run(self, config: LoadTestConfig) -> Summary:
        """Run every virtual user to completion and summarize the results.

        Args:
            config: Run configuration, validated before any request is sent

        Returns:
            Summary of all ``virtual_users * iterations_per_user`` requests

        Raises:
            ConfigurationError: If the configuration is invalid
            RunTimeoutError: If the run exceeds ``config.run_timeout``
            ExceptionGroup: If the target raised an unexpected error; the
                remaining virtual users are cancelled first

        """
        validate_config(config)

        results: list[RequestResult] = []
        log.info(
            "Starting load test: url=%s method=%s virtual_users=%d "
            "iterations_per_user=%d",
            config.target.url,
            config.target.method,
            config.virtual_users,
            config.iterations_per_user,
        )

        started = self.clock()
        try:
            async with asyncio.timeout(config.run_timeout):
                # the first unexpected error cancels every other virtual user
                async with asyncio.TaskGroup() as group:
                    for _ in range(config.virtual_users):
                        group.create_task(
                            self._run_virtual_user(
                                config.iterations_per_user, results
                            )
                        )
        except TimeoutError as e:
            raise RunTimeoutError(
                config.run_timeout, len(results), config.expected_requests
            ) from e
        duration = self.clock() - started

        log.info(
            "Load test completed: %d request(s) in %.2fs", len(results), duration
        )
        return summarize(results, duration)

    async def _run_virtual_user(
        self, iterations: int, results: list[RequestResult]
    ) -> None:
        """Send ``iterations`` requests one after another."""
        for _ in range(iterations):
            results.append(await self._timed_send())

    async def _timed_send(self) -> RequestResult:
        started = self.clock()
        outcome = await self.target.send()
        latency_ms = max(round((self.clock() - started) * 1000), 0)

        return RequestResult(
            latency_ms=latency_ms,
            status=outcome.status,
            ok=outcome.ok,
            reason=outcome.reason,
        )
