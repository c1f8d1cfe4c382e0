"""Caller-owned storage for Live refresh tokens

A refresh call may come back without a new refresh token, in which case the
last known one stays valid. The store holding it is always passed in
explicitly so refreshes for different accounts never share state.
"""

import threading
from typing import Optional, Protocol, runtime_checkable

from .models import LiveAuthResponse


@runtime_checkable
class TokenStore(Protocol):
    """Anything able to remember the last Live token response"""

    def get_refresh_token(self) -> Optional[str]:
        ...

    def save(self, response: LiveAuthResponse) -> None:
        ...


class MemoryTokenStore:
    """In-memory TokenStore, one instance per account"""

    def __init__(self, refresh_token: Optional[str] = None):
        self._lock = threading.Lock()
        self._refresh_token = refresh_token
        self._last_response: Optional[LiveAuthResponse] = None

    def get_refresh_token(self) -> Optional[str]:
        with self._lock:
            return self._refresh_token

    def save(self, response: LiveAuthResponse) -> None:
        with self._lock:
            self._last_response = response
            if response.refresh_token:
                self._refresh_token = response.refresh_token

    @property
    def last_response(self) -> Optional[LiveAuthResponse]:
        with self._lock:
            return self._last_response
