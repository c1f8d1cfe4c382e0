"""Microsoft Live authorization URL construction"""

from urllib.parse import urlencode

from settings import (
    LIVE_AUTHORIZE_URL,
    LIVE_CLIENT_ID,
    LIVE_REDIRECT_URI,
    LIVE_RESPONSE_TYPE,
    LIVE_SCOPE,
)


def get_authorize_url(
    client_id: str = LIVE_CLIENT_ID,
    scope: str = LIVE_SCOPE,
    response_type: str = LIVE_RESPONSE_TYPE,
    redirect_uri: str = LIVE_REDIRECT_URI,
) -> str:
    """Construct the login.live.com authorize URL

    Args:
        client_id: Live application id (defaults to the Xbox app)
        scope: OAuth scope
        response_type: 'token' or 'code'
        redirect_uri: Redirect URI registered for the client

    Returns:
        Full authorization URL
    """
    if response_type not in ("token", "code"):
        raise ValueError(f"response_type must be 'token' or 'code', got {response_type!r}")

    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": response_type,
        "scope": scope,
    }
    return f"{LIVE_AUTHORIZE_URL}?{urlencode(params)}"
