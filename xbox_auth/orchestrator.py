"""Full email/password to XSTS token authentication flow"""

import asyncio
import concurrent.futures
import logging
from typing import Any, Mapping, Optional, Union

from errors import ExchangeFailureError
from live import LiveCredentials, authenticate_with_credentials
from settings import XNET_USER_AUTHENTICATE_URL, XNET_XSTS_AUTHORIZE_URL
from transport import FetchClient
from utils.redaction import mask
from xnet import (
    XNETExchangeTokensOptions,
    XNETTokens,
    exchange_rps_ticket_for_user_token,
    exchange_tokens_for_xsts_token,
)
from .models import (
    AuthenticateOptions,
    AuthenticateRawResponse,
    AuthenticateResponse,
    AuthenticateResult,
)

logger = logging.getLogger(__name__)


def _validate_email(email: str) -> str:
    if not isinstance(email, str) or "@" not in email:
        raise ValueError("email must be a valid email address")
    return email


def _unexpected_response(message: str, url: str, body: Any) -> ExchangeFailureError:
    logger.error(f"{message} (url={url})")
    return ExchangeFailureError(
        message,
        extra={"url": url, "status_code": 200, "xerr": None, "response": {"body": body}},
    )


def _read_user_token(response: Any) -> str:
    token = response.get("Token") if isinstance(response, Mapping) else None
    if not isinstance(token, str) or not token:
        raise _unexpected_response("User token response has no Token", XNET_USER_AUTHENTICATE_URL, response)
    return token


def _read_xsts_response(response: Any) -> AuthenticateResponse:
    """Build the simplified result, a response missing the user claims is an exchange failure"""
    try:
        claims = response["DisplayClaims"]["xui"][0]
        return AuthenticateResponse(
            xuid=claims.get("xid") or None,
            user_hash=claims["uhs"],
            xsts_token=response["Token"],
            display_claims=response["DisplayClaims"],
            expires_on=response["NotAfter"],
        )
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise _unexpected_response(
            "XSTS response has no Token, NotAfter or user claims",
            XNET_XSTS_AUTHORIZE_URL,
            response,
        ) from e


async def authenticate(
    email: str,
    password: str,
    options: Union[AuthenticateOptions, Mapping[str, Any], None] = None,
    http: Optional[FetchClient] = None,
) -> AuthenticateResult:
    """Authenticate a Microsoft account and return its XSTS token

    Steps run strictly in sequence, any failure aborts the flow and the
    originating error is raised unchanged.

    Args:
        email: Microsoft account email
        password: Account password
        options: AuthenticateOptions or an equivalent mapping
        http: HTTP client shared by every step

    Returns:
        AuthenticateRawResponse when options.raw is set, AuthenticateResponse otherwise

    Raises:
        pydantic.ValidationError: If options are invalid (before any request)
        XboxAuthError: Any error raised by one of the steps
        ExchangeFailureError: If an Xbox Network response lacks the expected fields
    """
    if options is None:
        options = AuthenticateOptions()
    elif not isinstance(options, AuthenticateOptions):
        options = AuthenticateOptions.model_validate(options)
    _validate_email(email)

    http = http or FetchClient()
    logger.info(f"Authenticating {mask(email, 3)}")

    auth_response = await authenticate_with_credentials(LiveCredentials(email=email, password=password), http=http)
    user_token_response = await exchange_rps_ticket_for_user_token(auth_response.access_token, "t", http=http)

    # options already guarantee title_token implies device_token
    tokens = XNETTokens(
        user_tokens=[_read_user_token(user_token_response)],
        device_token=options.device_token,
        title_token=options.title_token,
    )

    xsts_response = await exchange_tokens_for_xsts_token(
        tokens,
        XNETExchangeTokensOptions(
            xsts_relying_party=options.xsts_relying_party,
            optional_display_claims=options.optional_display_claims,
            sandbox_id=options.sandbox_id,
        ),
        http=http,
    )

    if options.raw:
        return AuthenticateRawResponse.from_steps(auth_response, user_token_response, xsts_response)

    result = _read_xsts_response(xsts_response)
    if result.xuid is None:
        logger.info("XSTS token has no xid claim (child account without device token?)")
    logger.info("Authentication complete")
    return result


def authenticate_sync(
    email: str,
    password: str,
    options: Union[AuthenticateOptions, Mapping[str, Any], None] = None,
    http: Optional[FetchClient] = None,
) -> AuthenticateResult:
    """Synchronous version of authenticate

    Runs in a new event loop, or in a worker thread when called from code
    that already has a running loop.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(authenticate(email, password, options, http=http))

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(asyncio.run, authenticate(email, password, options, http=http))
        return future.result()
