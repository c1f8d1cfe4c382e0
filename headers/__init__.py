"""HTTP headers and constants package for the Xbox Live auth client"""

from .constants import (
    DEFAULT_HEADERS,
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    XBL_CONTRACT_VERSION_HEADER,
    SIGNATURE_HEADER,
    MS_CV_HEADER,
)

__all__ = [
    "DEFAULT_HEADERS",
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "XBL_CONTRACT_VERSION_HEADER",
    "SIGNATURE_HEADER",
    "MS_CV_HEADER",
]
