"""Classification of `/generate` responses.

Each check raises the matching ``RequestError`` subclass; the caller turns
the exception into a recorded outcome.
"""

import json
from typing import Any

from search_load_test.errors import ContractError, DecodeError, ProtocolError

MIN_MATCHED_DOCS = 10


def classify_status(status: int, treat_non_2xx_as_failure: bool) -> None:
    """Apply the status policy.

    With ``treat_non_2xx_as_failure`` only 2xx passes; otherwise anything
    below 500 does.
    """
    if treat_non_2xx_as_failure:
        passed = 200 <= status < 300
    else:
        passed = status < 500

    if not passed:
        raise ProtocolError(f"Unexpected status code {status}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def decode_body(text: str) -> Any:
    """Parse a response body as strict JSON.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e


def check_response_contract(payload: Any) -> None:
    """Validate the shape of a successful `/generate` response.

    Expected: ``{"success": true, "status": 200,
    "data": {"matched_docs": [...]}}`` with at least ``MIN_MATCHED_DOCS``
    matched documents.
    """
    if not isinstance(payload, dict):
        raise ContractError("Response body is not a JSON object")

    if payload.get("success") is not True:
        raise ContractError(f"Expected success=true, got {payload.get('success')!r}")

    if payload.get("status") != 200:
        raise ContractError(f"Expected status=200, got {payload.get('status')!r}")

    data = payload.get("data")
    if not isinstance(data, dict):
        raise ContractError("Response has no data object")

    matched_docs = data.get("matched_docs")
    if not isinstance(matched_docs, list):
        raise ContractError("data.matched_docs is not an array")

    if len(matched_docs) < MIN_MATCHED_DOCS:
        raise ContractError(
            f"Expected at least {MIN_MATCHED_DOCS} matched_docs, "
            f"got {len(matched_docs)}"
        )
