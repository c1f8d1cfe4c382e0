"""Xbox Live authentication client

Turns a Microsoft account email/password into an Xbox Live XSTS token:

    from xbox_auth import authenticate

    result = await authenticate("user@example.com", "password")
    print(result.xuid, result.authorization_header)

The individual steps are exposed through the ``live`` and ``xnet`` namespaces.
"""

from types import SimpleNamespace

import live
import xnet
from errors import (
    ExchangeFailureError,
    InvalidCredentialsError,
    ScrapeError,
    TransportError,
    TransportTimeoutError,
    TwoFactorRequiredError,
    UnauthorizedActivityError,
    XboxAuthError,
)
from transport import FetchClient, XSAPIFetchClient
from .models import (
    AuthenticateOptions,
    AuthenticateRawResponse,
    AuthenticateResponse,
    AuthenticateResult,
)
from .orchestrator import authenticate, authenticate_sync

http_client = SimpleNamespace(Base=FetchClient, XSAPI=XSAPIFetchClient)

__all__ = [
    "authenticate",
    "authenticate_sync",
    "live",
    "xnet",
    "http_client",
    "AuthenticateOptions",
    "AuthenticateRawResponse",
    "AuthenticateResponse",
    "AuthenticateResult",
    "ExchangeFailureError",
    "InvalidCredentialsError",
    "ScrapeError",
    "TransportError",
    "TransportTimeoutError",
    "TwoFactorRequiredError",
    "UnauthorizedActivityError",
    "XboxAuthError",
]
