"""Abstract base class for load test targets."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from search_load_test.models.result import Outcome


@dataclass(frozen=True, kw_only=True)
class Target(ABC):
    """Something a virtual user can send one request to.

    Implementations must never raise for a failed request: every failure
    is reported as an ``Outcome`` carrying a failure reason.
    """

    @abstractmethod
    async def send(self) -> Outcome:
        """Issue one request and classify the response.

        Returns:
            Outcome with the HTTP status (None when no response arrived)
            and the failure reason (None on success)

        """
