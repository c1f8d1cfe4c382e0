"""HTTP client for Xbox Network (XSAPI) endpoints"""

from typing import Any, Dict, Optional

from headers import (
    JSON_CONTENT_TYPE,
    MS_CV_HEADER,
    SIGNATURE_HEADER,
    XBL_CONTRACT_VERSION_HEADER,
)
from settings import XBL_CONTRACT_VERSION
from .client import FetchClient, merge_headers


class XSAPIFetchClient(FetchClient):
    """FetchClient adding the headers every Xbox Network endpoint expects"""

    def create_headers(self, headers: Optional[Dict[str, str]] = None, **options: Any) -> Dict[str, str]:
        """Build request headers

        Args:
            headers: Caller supplied headers, applied last
            **options: contract_version, signature, mscv, xsts_token, user_hash

        Returns:
            Request headers
        """
        request_headers = super().create_headers()
        request_headers["Accept"] = JSON_CONTENT_TYPE
        request_headers[XBL_CONTRACT_VERSION_HEADER] = str(options.get("contract_version") or XBL_CONTRACT_VERSION)

        xsts_token = options.get("xsts_token")
        if xsts_token is not None:
            request_headers["Authorization"] = f"XBL3.0 x={options.get('user_hash') or '*'};{xsts_token}"

        if options.get("signature") is not None:
            request_headers[SIGNATURE_HEADER] = options["signature"]

        if options.get("mscv") is not None:
            request_headers[MS_CV_HEADER] = options["mscv"]

        return merge_headers(request_headers, headers)


def as_xsapi_client(http: Optional[FetchClient] = None) -> XSAPIFetchClient:
    """Return an XSAPIFetchClient sharing the settings of ``http``"""
    if isinstance(http, XSAPIFetchClient):
        return http
    if http is None:
        return XSAPIFetchClient()
    return XSAPIFetchClient(timeout=http.timeout, transport=http.transport, user_agent=http.user_agent)
