"""Xbox Network (XNET) token exchanges"""

from . import experimental
from .constants import DISPLAY_CLAIMS, RELYING_PARTIES, SANDBOX_IDS, XERR_MESSAGES
from .models import (
    XBLExchangeTokensResponse,
    XNETDummyDeviceTokenResponse,
    XNETExchangeRpsTicketResponse,
    XNETExchangeTokensOptions,
    XNETTokens,
)
from .token_exchange import (
    ensure_preamble,
    exchange_rps_ticket_for_user_token,
    exchange_token_for_xsts_token,
    exchange_tokens_for_xsts_token,
)

__all__ = [
    "experimental",
    "DISPLAY_CLAIMS",
    "RELYING_PARTIES",
    "SANDBOX_IDS",
    "XERR_MESSAGES",
    "XBLExchangeTokensResponse",
    "XNETDummyDeviceTokenResponse",
    "XNETExchangeRpsTicketResponse",
    "XNETExchangeTokensOptions",
    "XNETTokens",
    "ensure_preamble",
    "exchange_rps_ticket_for_user_token",
    "exchange_token_for_xsts_token",
    "exchange_tokens_for_xsts_token",
]
