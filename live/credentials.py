"""Email/password authentication against login.live.com"""

import logging
from typing import Dict, Optional
from urllib.parse import parse_qsl

from errors import InvalidCredentialsError, TransportError
from headers import FORM_CONTENT_TYPE
from transport import FetchClient
from utils.redaction import mask
from .failure_classifier import classify_login_failure
from .models import LiveAuthResponse, LiveCredentials, PreAuthOptions
from .pre_auth import pre_auth

logger = logging.getLogger(__name__)


def parse_location_fragment(location: str) -> Optional[Dict[str, str]]:
    """Parse the '#key=value&...' part of a redirect target

    Args:
        location: Location header value

    Returns:
        Fragment parameters, or None when the URL has no fragment
    """
    if "#" not in location:
        return None
    fragment = location.split("#", 1)[1]
    if not fragment:
        return None
    return dict(parse_qsl(fragment, keep_blank_values=True))


def _missing_hash_parameters(status_code: int) -> InvalidCredentialsError:
    return InvalidCredentialsError(
        "The authentication has failed",
        code="MISSING_HASH_PARAMETERS",
        extra={"status_code": status_code},
    )


async def authenticate_with_credentials(
    credentials: LiveCredentials,
    http: Optional[FetchClient] = None,
    pre_auth_options: Optional[PreAuthOptions] = None,
) -> LiveAuthResponse:
    """Authenticate with a Microsoft account email and password

    Tokens are only delivered in the Location header of a 302, so redirects
    are never followed for the credential POST.

    Args:
        credentials: Email and password
        http: HTTP client, a fresh FetchClient by default
        pre_auth_options: OAuth parameters for the login page

    Returns:
        LiveAuthResponse parsed from the redirect fragment

    Raises:
        ScrapeError: If the login page can't be scraped
        InvalidCredentialsError: If the credentials are rejected (or a subclass
            when a more specific cause is detected)
        TransportError: On network failure
    """
    http = http or FetchClient()
    context = await pre_auth(pre_auth_options, http=http)

    logger.info(f"Submitting credentials for {mask(credentials.email, 3)}")
    try:
        response = await http.post(
            context.url_post,
            data={
                "login": credentials.email,
                "loginfmt": credentials.email,
                "passwd": credentials.password,
                "PPFT": context.ppft,
            },
            headers={
                "Content-Type": FORM_CONTENT_TYPE,
                "Cookie": context.cookie,
            },
            follow_redirects=False,
            parse_json=False,
        )
    except TransportError as e:
        if e.status_code is None:
            raise
        body = e.body if isinstance(e.body, str) else None
        raise classify_login_failure(e.status_code, body=body) from e

    location = response.headers.get("location", "")

    if response.status_code != 302:
        raise classify_login_failure(response.status_code, body=response.data, location=location)

    params = parse_location_fragment(location)
    if params is None or not params.get("access_token"):
        # Identity checks redirect away from the desktop callback
        failure = classify_login_failure(response.status_code, location=location)
        if type(failure) is not InvalidCredentialsError:
            raise failure
        logger.warning("Login redirect did not carry token parameters")
        raise _missing_hash_parameters(response.status_code)

    try:
        auth_response = LiveAuthResponse.from_mapping(params)
    except ValueError as e:
        logger.warning(f"Login redirect carried malformed token parameters: {e}")
        raise _missing_hash_parameters(response.status_code) from e

    logger.info(
        f"Live authentication succeeded (expires_in={auth_response.expires_in}, "
        f"refresh_token={'yes' if auth_response.refresh_token else 'no'})"
    )
    return auth_response
