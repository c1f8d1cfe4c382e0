"""Data models for Microsoft Live authentication"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import settings

# Keys of a Live token response mapped onto LiveAuthResponse attributes
_KNOWN_KEYS = ("token_type", "expires_in", "access_token", "refresh_token", "scope", "user_id")


@dataclass
class LiveCredentials:
    """Email/password pair, held only for one authentication call"""
    email: str
    password: str

    def __repr__(self) -> str:
        return f"LiveCredentials(email={self.email!r}, password='***')"


@dataclass
class PreAuthOptions:
    """OAuth parameters used to load the login page

    Attributes:
        client_id: Live application id
        scope: Requested scope
        response_type: 'token' or 'code'
        redirect_uri: Registered redirect URI
    """
    client_id: str = settings.LIVE_CLIENT_ID
    scope: str = settings.LIVE_SCOPE
    response_type: str = settings.LIVE_RESPONSE_TYPE
    redirect_uri: str = settings.LIVE_REDIRECT_URI


@dataclass
class PreAuthContext:
    """Values scraped from the login page, valid for a single POST

    Attributes:
        cookie: Cookie header value forwarded with the credentials
        ppft: Anti-forgery token
        url_post: Form target URL
    """
    cookie: str
    ppft: str
    url_post: str


@dataclass
class LiveAuthResponse:
    """Microsoft Live OAuth token response

    Attributes:
        token_type: Usually 'bearer'
        expires_in: Access token lifetime in seconds
        access_token: Short-lived access token (the RPS ticket)
        refresh_token: Long-lived refresh token, None when not issued
        scope: Granted scope
        user_id: Live user id
        extra: Any other key returned by the service
    """
    access_token: str
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    scope: Optional[str] = None
    user_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LiveAuthResponse":
        """Build from a decoded JSON body or parsed URL fragment

        ``expires_in`` is coerced to int and an empty refresh token becomes None.

        Raises:
            ValueError: If data is not a mapping or expires_in is not numeric
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        expires_in = data.get("expires_in")
        if expires_in is not None and expires_in != "":
            try:
                expires_in = int(float(expires_in))
            except (TypeError, OverflowError) as e:
                raise ValueError(f"invalid expires_in: {expires_in!r}") from e
        else:
            expires_in = None

        return cls(
            access_token=data.get("access_token", ""),
            token_type=data.get("token_type"),
            expires_in=expires_in,
            refresh_token=data.get("refresh_token") or None,
            scope=data.get("scope"),
            user_id=data.get("user_id"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flat dictionary in the wire format"""
        output = {key: getattr(self, key) for key in _KNOWN_KEYS}
        output.update(self.extra)
        return output
