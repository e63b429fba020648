from __future__ import annotations

from typing import Any, Final

from pydantic import ValidationError
import requests

from sample_types.common import ApiResponse
from sample_types.errors import UpstreamError
from sample_types.users import User

API_URL: Final[str] = "http://localhost:3000/users"

# Not a retry policy, only a bound on how long a dead API can hang the dashboard.
_TIMEOUT_SECONDS: Final[float] = 10.0


def fetch_users(session: requests.Session, *, url: str = API_URL) -> list[dict[str, Any]]:
    """GET the user list and return the envelope's `data` as plain dicts.

    Raises:
        UpstreamError: on network failure, a non-2xx status, or a body that is
            not an `ApiResponse[list[User]]`.
    """

    try:
        resp = session.get(url, timeout=_TIMEOUT_SECONDS)
        resp.raise_for_status()
        body = resp.json()
    except requests.RequestException as exc:
        raise UpstreamError("Could not fetch users", code="fetch_failed", details={"url": url, "error": str(exc)}) from exc

    try:
        envelope = ApiResponse[list[User]].model_validate(body)
    except ValidationError as exc:
        raise UpstreamError(
            "Malformed users response",
            code="malformed_response",
            details={"url": url, "errors": exc.errors(include_url=False)},
        ) from exc

    return [user.model_dump() for user in envelope.data]
