"""Experimental Xbox Network helpers

The dummy device token is a workaround: it replays a fixed, pre-signed
proof-of-possession request for a generic Win32 device. The payload below is
an opaque fixture and must stay byte-identical to what the service accepts.
The device id may be banned by Xbox Network at any time.
"""

import logging
from typing import Any, Dict, Optional

from errors import TransportError
from settings import XNET_DEVICE_AUTHENTICATE_URL
from transport import FetchClient, as_xsapi_client
from .constants import DEFAULT_RELYING_PARTY, TOKEN_TYPE
from .models import XNETDummyDeviceTokenResponse
from .token_exchange import to_exchange_failure

logger = logging.getLogger(__name__)

DUMMY_WIN32_SIGNATURE = (
    "AAAAAQHcFbBVEuAAHfvqYcbt4rhMgxAKtPiOJgct4UTCX2HqbQNLTHsnwjp9zcYNZMKHEknpyGWNqsIhyXaAd2v8ADmGrfh11oMS1g=="
)

DUMMY_WIN32_PROPERTIES: Dict[str, Any] = {
    "AuthMethod": "ProofOfPossession",
    "Id": "91dc36cd-080a-4493-8234-3b585c78b0d5",
    "DeviceType": "Win32",
    "Version": "10.0.19042",
    "ProofKey": {
        "crv": "P-256",
        "alg": "ES256",
        "use": "sig",
        "kty": "EC",
        "x": "qMKczrK1b5opLCIX-tzyqOWztlbERh1i5sxDzdHrdxs",
        "y": "23uwwgd2oSnWzyjHflRKaLxFsxX0-oE-mECf6c0gOaE",
    },
}


async def create_dummy_win32_device_token(http: Optional[FetchClient] = None) -> XNETDummyDeviceTokenResponse:
    """Create a device token for a generic Win32 device

    Args:
        http: HTTP client shared with the other steps

    Returns:
        The decoded device.auth.xboxlive.com response

    Raises:
        ExchangeFailureError: If the service rejects the signed payload
        TransportError: On network failure or timeout
    """
    client = as_xsapi_client(http)
    payload = {
        "RelyingParty": DEFAULT_RELYING_PARTY,
        "TokenType": TOKEN_TYPE,
        "Properties": DUMMY_WIN32_PROPERTIES,
    }

    logger.warning("Requesting a dummy Win32 device token (experimental)")
    try:
        response = await client.post(
            XNET_DEVICE_AUTHENTICATE_URL,
            json=payload,
            signature=DUMMY_WIN32_SIGNATURE,
        )
    except TransportError as e:
        if e.status_code is None:
            raise
        raise to_exchange_failure(e, "Cannot create a dummy Win32 device token") from e

    return response.data
