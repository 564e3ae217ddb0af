"""Fixtures for unit tests."""

from pathlib import Path

import pytest

LOAD_ENV_VARS = (
    "LOAD_TARGET_URL",
    "LOAD_QUERY",
    "LOAD_CONCURRENCY",
    "LOAD_ITERATIONS",
    "LOAD_P95_MS",
    "LOAD_MAX_FAILURE_RATE",
    "LOAD_FAIL_ON_NON_2XX",
    "LOAD_TEST_TIMEOUT_MS",
    "LOAD_REQUEST_TIMEOUT_MS",
    "LOAD_REPORT_DIR",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the caller's LOAD_ variables and any .env file."""
    for name in LOAD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
