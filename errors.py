"""Error types raised by the Xbox Live auth client

Every error carries a machine readable ``code`` and an ``extra`` mapping with
diagnostic details (status code, response body, partial matches...).
"""

from typing import Any, Dict, Optional


class XboxAuthError(Exception):
    """Base class for every error raised by this library"""

    default_code = "INTERNAL_ERROR"

    def __init__(self, message: str = "", code: Optional[str] = None, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.extra = dict(extra or {})

    def to_dict(self) -> Dict[str, Any]:
        """Serializable representation of the error"""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "extra": self.extra,
        }

    def __str__(self) -> str:
        return f"{self.message} ({self.code})" if self.message else self.code


class ScrapeError(XboxAuthError):
    """Expected parameters were not found on the login page"""

    default_code = "PRE_AUTH_ERROR"


class InvalidCredentialsError(XboxAuthError):
    """Credentials were rejected by login.live.com"""

    default_code = "INVALID_CREDENTIALS_OR_2FA_ENABLED"


class UnauthorizedActivityError(InvalidCredentialsError):
    """The account must confirm its identity before signing in"""

    default_code = "UNAUTHORIZED_ACTIVITY"


class TwoFactorRequiredError(InvalidCredentialsError):
    """The account has a second factor enabled"""

    default_code = "TWO_FACTOR_REQUIRED"


class ExchangeFailureError(XboxAuthError):
    """Xbox Network rejected a token exchange"""

    default_code = "EXCHANGE_FAILURE"

    @property
    def status_code(self) -> Optional[int]:
        return self.extra.get("status_code")

    @property
    def xerr(self) -> Optional[int]:
        return self.extra.get("xerr")


class TransportError(XboxAuthError):
    """Network failure or unexpected HTTP status

    Attributes mirror the failing exchange so callers can inspect what the
    remote service returned.
    """

    default_code = "REQUEST_ERROR"

    def __init__(
        self,
        message: str = "",
        code: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            message,
            code=code,
            extra={
                "url": url,
                "status_code": status_code,
                "response": {"body": body, "headers": dict(headers or {})},
            },
        )
        self.url = url
        self.status_code = status_code
        self.body = body
        self.headers = dict(headers or {})


class TransportTimeoutError(TransportError):
    """The request did not complete before its timeout"""

    default_code = "TIMEOUT_ERROR"
