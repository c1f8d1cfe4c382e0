"""Base HTTP client used for every outbound request

Each request opens its own ``httpx.AsyncClient`` so concurrent
authentications never share cookies or connections.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from errors import TransportError, TransportTimeoutError
from headers import DEFAULT_HEADERS
from settings import DEFAULT_TIMEOUT, MAX_TIMEOUT, MIN_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def calculate_timeout(timeout: Optional[float] = None) -> float:
    """Clamp a timeout (seconds) between MIN_TIMEOUT and MAX_TIMEOUT

    Args:
        timeout: Requested timeout, DEFAULT_TIMEOUT when None

    Returns:
        Timeout in seconds
    """
    if timeout is None:
        timeout = DEFAULT_TIMEOUT
    return max(MIN_TIMEOUT, min(MAX_TIMEOUT, float(timeout)))


@dataclass
class FetchResponse:
    """Response returned by FetchClient

    Attributes:
        status_code: HTTP status code
        headers: Response headers (lower-cased names, repeated headers joined)
        data: Decoded JSON, text body, or None for redirects
        url: Final request URL
        set_cookies: Every raw Set-Cookie header value, in order
    """
    status_code: int
    headers: Dict[str, str]
    data: Any = None
    url: str = ""
    set_cookies: List[str] = field(default_factory=list)


class FetchClient:
    """Minimal async HTTP client with clamped timeouts and manual redirects"""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            timeout: Per-request timeout in seconds (clamped, see calculate_timeout)
            transport: Optional httpx transport, mostly for tests
            user_agent: Overrides the configured User-Agent
        """
        self.timeout = calculate_timeout(timeout)
        self.transport = transport
        self.user_agent = user_agent or USER_AGENT

    def create_headers(self, headers: Optional[Dict[str, str]] = None, **options: Any) -> Dict[str, str]:
        """Build request headers, caller supplied values win over defaults"""
        request_headers = {**DEFAULT_HEADERS, "User-Agent": self.user_agent}
        return merge_headers(request_headers, headers)

    async def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        follow_redirects: bool = True,
        parse_json: bool = True,
        **options: Any,
    ) -> FetchResponse:
        return await self.fetch(
            "GET", url,
            headers=headers,
            follow_redirects=follow_redirects,
            parse_json=parse_json,
            **options,
        )

    async def post(
        self,
        url: str,
        data: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        follow_redirects: bool = True,
        parse_json: bool = True,
        **options: Any,
    ) -> FetchResponse:
        return await self.fetch(
            "POST", url,
            data=data,
            json=json,
            headers=headers,
            follow_redirects=follow_redirects,
            parse_json=parse_json,
            **options,
        )

    async def fetch(
        self,
        method: str,
        url: str,
        data: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        follow_redirects: bool = True,
        parse_json: bool = True,
        **options: Any,
    ) -> FetchResponse:
        """Run a request

        3xx responses are returned as-is when follow_redirects is False,
        4xx/5xx responses raise TransportError.

        Raises:
            TransportTimeoutError: If the request timed out
            TransportError: On network failure, error status, or undecodable JSON
        """
        request_headers = self.create_headers(headers, **options)
        logger.debug(f"{method} {_strip_query(url)} (timeout={self.timeout}s, follow_redirects={follow_redirects})")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=follow_redirects,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    data=data,
                    json=json,
                    headers=request_headers,
                )
        except httpx.TimeoutException as e:
            logger.error(f"{method} {_strip_query(url)} timed out after {self.timeout}s")
            raise TransportTimeoutError(
                f"Request timed out after {self.timeout}s",
                url=url,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"{method} {_strip_query(url)} failed: {e}")
            raise TransportError(
                f"Request failed: {e}",
                code="NETWORK_ERROR",
                url=url,
            ) from e

        logger.debug(f"{method} {_strip_query(url)} -> {response.status_code}")
        response_headers = dict(response.headers)
        set_cookies = response.headers.get_list("set-cookie")

        if response.status_code >= 400:
            raise TransportError(
                response.reason_phrase or f"HTTP {response.status_code}",
                url=str(response.url),
                status_code=response.status_code,
                body=_error_body(response),
                headers=response_headers,
            )

        if 300 <= response.status_code < 400:
            return FetchResponse(
                status_code=response.status_code,
                headers=response_headers,
                data=None,
                url=str(response.url),
                set_cookies=set_cookies,
            )

        if parse_json and response.status_code != 204:
            try:
                payload = response.json()
            except ValueError as e:
                raise TransportError(
                    f"Could not decode JSON response: {e}",
                    code="PARSE_ERROR",
                    url=str(response.url),
                    status_code=response.status_code,
                    body=response.text,
                    headers=response_headers,
                ) from e
        else:
            payload = response.text

        return FetchResponse(
            status_code=response.status_code,
            headers=response_headers,
            data=payload,
            url=str(response.url),
            set_cookies=set_cookies,
        )


def merge_headers(base: Dict[str, str], overrides: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Apply header overrides, names compared case-insensitively"""
    if not overrides:
        return base
    lowered = {name.lower() for name in overrides}
    merged = {name: value for name, value in base.items() if name.lower() not in lowered}
    merged.update(overrides)
    return merged


def _error_body(response: httpx.Response) -> Any:
    """Decode an error body as JSON when possible, text otherwise"""
    try:
        return response.json()
    except ValueError:
        return response.text


def _strip_query(url: str) -> str:
    return url.split("?", 1)[0]
