"""HTTP target for the search backend's generate endpoint."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from search_load_test.contract import (
    check_response_contract,
    classify_status,
    decode_body,
)
from search_load_test.errors import NetworkError, RequestError
from search_load_test.models.config import LoadTestConfig, TargetRequest
from search_load_test.models.result import Outcome
from search_load_test.targets.base import Target

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class HttpTarget(Target):
    """Sends the configured request with a shared aiohttp session."""

    request: TargetRequest
    treat_non_2xx_as_failure: bool = True
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: LoadTestConfig
    ) -> AsyncGenerator["HttpTarget", None]:
        """Create target with managed session lifecycle."""
        connector = aiohttp.TCPConnector(limit=max(config.virtual_users, 1))
        timeout = aiohttp.ClientTimeout(total=config.request_timeout)
        async with aiohttp.ClientSession(
            connector=connector,
            timeout=timeout,
            headers=dict(config.target.headers),
        ) as session:
            yield cls(
                request=config.target,
                treat_non_2xx_as_failure=config.treat_non_2xx_as_failure,
                session=session,
            )

    async def send(self) -> Outcome:
        """Send one request and classify it, recording any failure."""
        status: int | None = None
        try:
            status, text = await self._fetch()
            classify_status(status, self.treat_non_2xx_as_failure)
            check_response_contract(decode_body(text))
        except RequestError as e:
            log.debug("Request failed: reason=%s status=%s: %s", e.reason, status, e)
            return Outcome(status=status, reason=e.reason)

        return Outcome(status=status)

    async def _fetch(self) -> tuple[int, str]:
        """Issue the request and read the body as text."""
        try:
            async with self.session.request(
                self.request.method,
                self.request.url,
                json=dict(self.request.body),
            ) as response:
                try:
                    text = await response.text()
                except UnicodeDecodeError:
                    # undecodable bodies are classified as invalid JSON
                    text = ""
                return response.status, text
        except (aiohttp.ClientError, TimeoutError) as e:
            raise NetworkError(f"{type(e).__name__}: {e}") from e
