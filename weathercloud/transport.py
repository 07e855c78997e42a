# ABOUTME: HTTP fetch adapter for the Weathercloud endpoints.
# ABOUTME: Issues GET or form-encoded POST requests with the session cookies attached and decodes JSON.

import logging
from typing import Any

import httpx

from weathercloud.session import Session

logger = logging.getLogger(__name__)

AJAX_HEADERS = {
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "X-Requested-With": "XMLHttpRequest",
}


def build_headers(session: Session, extra: dict[str, str] | None = None) -> dict[str, str]:
    """Request headers carrying the session cookies, if any."""
    headers = dict(extra or {})
    cookie = session.cookie_header()
    if cookie:
        headers["Cookie"] = cookie
    return headers


async def fetch_data(
    client: httpx.AsyncClient,
    session: Session,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    data: dict[str, Any] | None = None,
) -> Any:
    """Fetch a Weathercloud endpoint and return its decoded JSON body.

    Requests with form data are sent as POST, the rest as GET. The HTTP status is not
    checked here: callers decide from the payload whether the endpoint returned usable data.
    """
    if data is None:
        resp = await client.get(url, params=params, headers=build_headers(session))
    else:
        resp = await client.post(url, params=params, data=data, headers=build_headers(session, AJAX_HEADERS))
    logger.debug("%s -> %s", url, resp.status_code)
    return resp.json()


def has_field(payload: Any, key: str) -> bool:
    """True if a decoded payload is a JSON object carrying key."""
    return isinstance(payload, dict) and key in payload
