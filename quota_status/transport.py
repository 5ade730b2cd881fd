"""Single-attempt HTTP transport shared by all providers."""

import logging
from typing import Any

import httpx

from .errors import ResponseFormatError, TransportError
from .models import (
    REQUEST_TIMEOUT,
    ApiKeyAuth,
    AuthData,
    CopilotTokenAuth,
    OAuthAuth,
    SessionCookieAuth,
)

logger = logging.getLogger(__name__)

USER_AGENT = "quota-status/0.1"


def auth_headers(auth: AuthData) -> dict[str, str]:
    """Build the authentication header for a credential."""
    match auth:
        case SessionCookieAuth(session=session):
            return {"Cookie": f"HERTZ-SESSION={session}"}
        case ApiKeyAuth(key=key):
            return {"Authorization": f"Bearer {key}"}
        case CopilotTokenAuth(token=token):
            return {"Authorization": f"Bearer {token}"}
        case OAuthAuth(access=access):
            return {"Authorization": f"Bearer {access}"}
    raise TypeError(f"Unsupported credential type: {type(auth).__name__}")


async def request_json(
    method: str,
    url: str,
    *,
    provider: str,
    headers: dict[str, str],
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Perform one request and return the decoded JSON body.

    Raises TransportError for timeouts, connection failures and non-2xx
    statuses, and ResponseFormatError when the body is not JSON.
    """
    request_headers = {"User-Agent": USER_AGENT, **headers}
    logger.debug("%s %s %s", provider, method, url)

    async with httpx.AsyncClient(
        timeout=REQUEST_TIMEOUT, transport=transport
    ) as client:
        try:
            response = await client.request(method, url, headers=request_headers)
        except httpx.TimeoutException as e:
            raise TransportError.timeout(provider) from e
        except httpx.HTTPError as e:
            raise TransportError(provider, None, str(e) or type(e).__name__) from e

    logger.debug("%s responded with HTTP %s", provider, response.status_code)
    if not response.is_success:
        raise TransportError(provider, response.status_code, response.text.strip())

    try:
        return response.json()
    except ValueError as e:
        raise ResponseFormatError(provider, str(e)) from e
