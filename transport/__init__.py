"""HTTP transport used by the Live and Xbox Network exchanges"""

from .client import FetchClient, FetchResponse, calculate_timeout
from .xsapi_client import XSAPIFetchClient, as_xsapi_client

__all__ = [
    "FetchClient",
    "FetchResponse",
    "XSAPIFetchClient",
    "as_xsapi_client",
    "calculate_timeout",
]
