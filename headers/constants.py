"""HTTP request headers sent to Microsoft Live and Xbox Network"""

from typing import Dict

# Sent with every request unless a caller overrides them
DEFAULT_HEADERS: Dict[str, str] = {
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
}

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

# Xbox Network specific header names
XBL_CONTRACT_VERSION_HEADER = "X-Xbl-Contract-Version"
SIGNATURE_HEADER = "Signature"
MS_CV_HEADER = "MS-CV"
