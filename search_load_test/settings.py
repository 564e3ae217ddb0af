"""Environment configuration of a load test run.

Every setting can be overridden with a ``LOAD_`` prefixed environment
variable, e.g.:

    LOAD_TARGET_URL=http://localhost:8000/generate
    LOAD_CONCURRENCY=75
    LOAD_ITERATIONS=20
    LOAD_FAIL_ON_NON_2XX=false
"""

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from search_load_test.errors import ConfigurationError
from search_load_test.models.config import (
    DEFAULT_HEADERS,
    DEFAULT_TARGET_URL,
    LoadTestConfig,
    SLAThresholds,
    TargetRequest,
)


class LoadTestSettings(BaseSettings):
    """Load test settings read from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="LOAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    target_url: str = Field(
        default=DEFAULT_TARGET_URL, description="Endpoint under test"
    )
    query: str = Field(default="a", description="Search query sent in the body")
    concurrency: int = Field(default=50, description="Virtual users")
    iterations: int = Field(default=50, description="Requests per virtual user")
    p95_ms: int = Field(default=1500, description="Allowed P95 latency (ms)")
    max_failure_rate: float = Field(default=0.02, description="Allowed failure rate")
    fail_on_non_2xx: bool = Field(
        default=True, description="Count any non-2xx status as a failure"
    )
    test_timeout_ms: int = Field(
        default=300_000, description="Wall-clock limit for the whole run (ms)"
    )
    request_timeout_ms: int = Field(
        default=30_000, description="Per-request timeout (ms)"
    )
    report_dir: Path | None = Field(
        default=None, description="Directory for the summary artifacts"
    )

    def to_config(self) -> LoadTestConfig:
        """Build the run configuration passed to the harness.

        Raises:
            ConfigurationError: If the values do not form a valid configuration

        """
        try:
            return LoadTestConfig(
                target=TargetRequest(
                    url=self.target_url,
                    method="POST",
                    headers=dict(DEFAULT_HEADERS),
                    body={"query": self.query},
                ),
                virtual_users=self.concurrency,
                iterations_per_user=self.iterations,
                thresholds=SLAThresholds(
                    max_failure_rate=self.max_failure_rate,
                    max_p95_latency_ms=self.p95_ms,
                ),
                treat_non_2xx_as_failure=self.fail_on_non_2xx,
                run_timeout=self.test_timeout_ms / 1000,
                request_timeout=self.request_timeout_ms / 1000,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid load test configuration: {e}") from e


def load_settings(**overrides: Any) -> LoadTestSettings:
    """Read settings from the environment, applying explicit overrides.

    Overrides set to None are ignored so that unset CLI flags fall back to
    the environment.

    Raises:
        ConfigurationError: If a value cannot be parsed

    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return LoadTestSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid load test settings: {e}") from e
