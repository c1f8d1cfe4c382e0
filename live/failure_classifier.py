"""Best-effort classification of rejected credential submissions

login.live.com does not tell a wrong password apart from an account that
needs a second factor or an identity check. The only signal is the markup it
serves back, which changes without notice. The result is advisory: when no
marker matches, the generic invalid-credentials error is returned.
"""

import logging
from typing import Iterable, Optional

import settings
from errors import (
    InvalidCredentialsError,
    TwoFactorRequiredError,
    UnauthorizedActivityError,
)

logger = logging.getLogger(__name__)


def _contains_any(haystacks: Iterable[str], markers: Iterable[str]) -> Optional[str]:
    for marker in markers:
        lowered = marker.lower()
        for haystack in haystacks:
            if haystack and lowered in haystack.lower():
                return marker
    return None


def classify_login_failure(
    status_code: int,
    body: Optional[str] = None,
    location: Optional[str] = None,
    activity_markers: Optional[Iterable[str]] = None,
    two_factor_markers: Optional[Iterable[str]] = None,
) -> InvalidCredentialsError:
    """Pick the most specific error for a failed credential POST

    Args:
        status_code: Status of the credential POST
        body: Response body, if any
        location: Location header, if any
        activity_markers: Overrides settings.ACTIVITY_CONFIRMATION_MARKERS
        two_factor_markers: Overrides settings.TWO_FACTOR_MARKERS

    Returns:
        An InvalidCredentialsError (or subclass) ready to be raised
    """
    if activity_markers is None:
        activity_markers = settings.ACTIVITY_CONFIRMATION_MARKERS
    if two_factor_markers is None:
        two_factor_markers = settings.TWO_FACTOR_MARKERS

    haystacks = [body or "", location or ""]
    extra = {"status_code": status_code}

    marker = _contains_any(haystacks, activity_markers)
    if marker is not None:
        logger.warning(f"Login rejected, activity confirmation marker found: {marker}")
        return UnauthorizedActivityError(
            "Activity confirmation required, sign in from a browser to unlock the account",
            extra={**extra, "marker": marker},
        )

    marker = _contains_any(haystacks, two_factor_markers)
    if marker is not None:
        logger.warning(f"Login rejected, second factor marker found: {marker}")
        return TwoFactorRequiredError(
            "Two-factor authentication is enabled on this account",
            extra={**extra, "marker": marker},
        )

    logger.warning(f"Login rejected with status {status_code}")
    return InvalidCredentialsError("The authentication has failed", extra=extra)
