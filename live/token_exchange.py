"""OAuth token endpoint exchanges (refresh token and authorization code)"""

import logging
from typing import Dict, Optional

from errors import TransportError
from headers import FORM_CONTENT_TYPE
from settings import LIVE_CLIENT_ID, LIVE_SCOPE, LIVE_TOKEN_URL
from transport import FetchClient
from .models import LiveAuthResponse
from .token_store import TokenStore

logger = logging.getLogger(__name__)

TOKEN_HEADERS = {
    "Accept": "application/json",
    "Content-Type": FORM_CONTENT_TYPE,
}


async def _post_token_request(payload: Dict[str, str], http: Optional[FetchClient]) -> LiveAuthResponse:
    http = http or FetchClient()
    response = await http.post(LIVE_TOKEN_URL, data=payload, headers=TOKEN_HEADERS)
    try:
        return LiveAuthResponse.from_mapping(response.data or {})
    except ValueError as e:
        logger.error(f"Malformed token endpoint response: {e}")
        raise TransportError(
            f"Could not decode token response: {e}",
            code="PARSE_ERROR",
            url=response.url,
            status_code=response.status_code,
            body=response.data,
            headers=response.headers,
        ) from e


async def exchange_code_for_access_token(
    code: str,
    client_id: str,
    scope: str,
    redirect_uri: str,
    client_secret: Optional[str] = None,
    http: Optional[FetchClient] = None,
) -> LiveAuthResponse:
    """Exchange an authorization code for an access token

    Args:
        code: Authorization code from the redirect
        client_id: Live application id
        scope: OAuth scope
        redirect_uri: Redirect URI used for the authorization
        client_secret: Client secret, only sent when given
        http: HTTP client, a fresh FetchClient by default

    Returns:
        LiveAuthResponse

    Raises:
        TransportError: If the token endpoint rejects the request
    """
    payload = {
        "code": code,
        "client_id": client_id,
        "grant_type": "authorization_code",
        "redirect_uri": redirect_uri,
        "scope": scope,
    }
    if client_secret is not None:
        payload["client_secret"] = client_secret

    logger.info("Exchanging authorization code for access token")
    return await _post_token_request(payload, http)


async def refresh_access_token(
    refresh_token: Optional[str],
    client_id: str = LIVE_CLIENT_ID,
    scope: str = LIVE_SCOPE,
    client_secret: Optional[str] = None,
    token_store: Optional[TokenStore] = None,
    http: Optional[FetchClient] = None,
) -> LiveAuthResponse:
    """Refresh an expired access token

    When a token store is given, its refresh token is used if none is passed,
    a response without a new refresh token keeps the one that was sent, and
    the result is saved back into the store.

    Args:
        refresh_token: Refresh token, may be None when token_store holds one
        client_id: Live application id
        scope: OAuth scope
        client_secret: Client secret, only sent when given
        token_store: Caller-owned store for the last known refresh token
        http: HTTP client, a fresh FetchClient by default

    Returns:
        LiveAuthResponse

    Raises:
        ValueError: If no refresh token is available
        TransportError: If the token endpoint rejects the request
    """
    if refresh_token is None and token_store is not None:
        refresh_token = token_store.get_refresh_token()
    if not refresh_token:
        raise ValueError("No refresh token provided")

    payload = {
        "client_id": client_id,
        "scope": scope,
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
    }
    if client_secret is not None:
        payload["client_secret"] = client_secret

    logger.info("Refreshing Live access token")
    response = await _post_token_request(payload, http)

    if token_store is not None:
        if response.refresh_token is None:
            response.refresh_token = refresh_token
        token_store.save(response)

    return response
