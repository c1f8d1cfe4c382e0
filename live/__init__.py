"""Microsoft Live (login.live.com) authentication

Provides the login page scraping, credential submission and OAuth token
endpoint exchanges that produce the RPS ticket used by Xbox Network.
"""

from .authorization import get_authorize_url
from .credentials import authenticate_with_credentials, parse_location_fragment
from .extractors import (
    DEFAULT_EXTRACTORS,
    PPFT_EXTRACTOR,
    URL_POST_EXTRACTOR,
    ParameterExtractor,
    extract_parameters,
)
from .failure_classifier import classify_login_failure
from .models import LiveAuthResponse, LiveCredentials, PreAuthContext, PreAuthOptions
from .pre_auth import build_cookie_header, pre_auth
from .token_exchange import exchange_code_for_access_token, refresh_access_token
from .token_store import MemoryTokenStore, TokenStore

__all__ = [
    "get_authorize_url",
    "authenticate_with_credentials",
    "parse_location_fragment",
    "DEFAULT_EXTRACTORS",
    "PPFT_EXTRACTOR",
    "URL_POST_EXTRACTOR",
    "ParameterExtractor",
    "extract_parameters",
    "classify_login_failure",
    "LiveAuthResponse",
    "LiveCredentials",
    "PreAuthContext",
    "PreAuthOptions",
    "build_cookie_header",
    "pre_auth",
    "exchange_code_for_access_token",
    "refresh_access_token",
    "MemoryTokenStore",
    "TokenStore",
]
