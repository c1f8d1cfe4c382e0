"""Xbox Network token exchanges (RPS ticket -> user token -> XSTS token)"""

import logging
import re
from typing import Any, Dict, Mapping, Optional, Union

from errors import ExchangeFailureError, TransportError
from settings import XNET_USER_AUTHENTICATE_URL, XNET_XSTS_AUTHORIZE_URL
from transport import FetchClient, as_xsapi_client
from .constants import (
    CHILD_ACCOUNT_HINT,
    DEFAULT_RELYING_PARTY,
    RELYING_PARTIES,
    SANDBOX_IDS,
    TOKEN_TYPE,
    USER_SITE_NAME,
    XERR_MESSAGES,
)
from .models import (
    XBLExchangeTokensResponse,
    XNETExchangeRpsTicketResponse,
    XNETExchangeTokensOptions,
    XNETTokens,
)

logger = logging.getLogger(__name__)

PREAMBLE_PATTERN = re.compile(r"^[dt]=")


def to_exchange_failure(error: TransportError, message: str, hint: Optional[str] = None) -> ExchangeFailureError:
    """Turn an HTTP error from Xbox Network into an ExchangeFailureError

    The XErr code from the body, when present, selects a more precise message.

    Args:
        error: TransportError carrying the rejected response
        message: Base message for the exchange
        hint: Extra advice appended to the message

    Returns:
        ExchangeFailureError to raise from the transport error
    """
    body = error.body
    xerr = body.get("XErr") if isinstance(body, dict) else None
    if xerr in XERR_MESSAGES:
        message = f"{message}: {XERR_MESSAGES[xerr]}"
    if hint:
        message = f"{message}. {hint}"

    return ExchangeFailureError(
        message,
        extra={
            "url": error.url,
            "status_code": error.status_code,
            "xerr": xerr,
            "response": {"body": body, "headers": error.headers},
        },
    )


def ensure_preamble(rps_ticket: str, preamble: str = "t") -> str:
    """Prefix an RPS ticket with 't=' or 'd=' unless it already has one

    Args:
        rps_ticket: Live access token, optionally prefixed
        preamble: 't' for a standard ticket, 'd' for a device/Azure app ticket

    Returns:
        Prefixed ticket
    """
    if preamble not in ("t", "d"):
        raise ValueError(f"preamble must be 't' or 'd', got {preamble!r}")
    if PREAMBLE_PATTERN.match(rps_ticket):
        return rps_ticket
    return f"{preamble}={rps_ticket}"


async def exchange_rps_ticket_for_user_token(
    rps_ticket: str,
    preamble: str = "t",
    additional_headers: Optional[Dict[str, str]] = None,
    http: Optional[FetchClient] = None,
) -> XNETExchangeRpsTicketResponse:
    """Exchange an RPS ticket for a user token

    Args:
        rps_ticket: The RPS ticket (Live access token)
        preamble: Ticket preamble, used only when the ticket has none
        additional_headers: Extra request headers
        http: HTTP client shared with the other steps

    Returns:
        The decoded user.auth.xboxlive.com response

    Raises:
        ExchangeFailureError: If Xbox Network rejects the ticket
        TransportError: On network failure or timeout
    """
    client = as_xsapi_client(http)
    payload = {
        "RelyingParty": DEFAULT_RELYING_PARTY,
        "TokenType": TOKEN_TYPE,
        "Properties": {
            "AuthMethod": "RPS",
            "SiteName": USER_SITE_NAME,
            "RpsTicket": ensure_preamble(rps_ticket, preamble),
        },
    }

    logger.debug("Exchanging RPS ticket for user token")
    try:
        response = await client.post(XNET_USER_AUTHENTICATE_URL, json=payload, headers=additional_headers)
    except TransportError as e:
        if e.status_code is None:
            raise
        logger.error(f"User token exchange failed with status {e.status_code}")
        raise to_exchange_failure(e, 'Cannot exchange "rpsTicket" for a user token') from e

    return response.data


async def exchange_tokens_for_xsts_token(
    tokens: Union[XNETTokens, Mapping[str, Any]],
    options: Union[XNETExchangeTokensOptions, Mapping[str, Any], None] = None,
    additional_headers: Optional[Dict[str, str]] = None,
    http: Optional[FetchClient] = None,
) -> XBLExchangeTokensResponse:
    """Exchange user (and optional device/title) tokens for an XSTS token

    Args:
        tokens: XNETTokens or an equivalent mapping, validated before any request
        options: Relying party, display claims and sandbox
        additional_headers: Extra request headers
        http: HTTP client shared with the other steps

    Returns:
        The decoded xsts.auth.xboxlive.com response

    Raises:
        pydantic.ValidationError: If tokens or options are invalid
        ExchangeFailureError: If Xbox Network rejects the tokens
        TransportError: On network failure or timeout
    """
    if not isinstance(tokens, XNETTokens):
        tokens = XNETTokens.model_validate(tokens)
    if options is None:
        options = XNETExchangeTokensOptions()
    elif not isinstance(options, XNETExchangeTokensOptions):
        options = XNETExchangeTokensOptions.model_validate(options)

    properties: Dict[str, Any] = {"UserTokens": tokens.user_tokens}
    if tokens.device_token is not None:
        properties["DeviceToken"] = tokens.device_token
    if tokens.title_token is not None:
        properties["TitleToken"] = tokens.title_token
    if options.optional_display_claims is not None:
        properties["OptionalDisplayClaims"] = options.optional_display_claims
    properties["SandboxId"] = options.sandbox_id or SANDBOX_IDS["RETAIL"]

    payload = {
        "RelyingParty": options.xsts_relying_party or RELYING_PARTIES["XBOX_LIVE"],
        "TokenType": TOKEN_TYPE,
        "Properties": properties,
    }

    client = as_xsapi_client(http)
    logger.debug(
        f"Exchanging tokens for XSTS token (relying_party={payload['RelyingParty']}, "
        f"device_token={'yes' if tokens.device_token else 'no'})"
    )
    try:
        response = await client.post(XNET_XSTS_AUTHORIZE_URL, json=payload, headers=additional_headers)
    except TransportError as e:
        if e.status_code is None:
            raise
        logger.error(f"XSTS exchange failed with status {e.status_code}")
        raise to_exchange_failure(e, "Cannot exchange tokens for an XSTS token", hint=CHILD_ACCOUNT_HINT) from e

    return response.data


async def exchange_token_for_xsts_token(
    user_token: str,
    options: Union[XNETExchangeTokensOptions, Mapping[str, Any], None] = None,
    additional_headers: Optional[Dict[str, str]] = None,
    http: Optional[FetchClient] = None,
) -> XBLExchangeTokensResponse:
    """Exchange a single user token for an XSTS token"""
    return await exchange_tokens_for_xsts_token(
        XNETTokens(user_tokens=[user_token]),
        options,
        additional_headers,
        http=http,
    )
