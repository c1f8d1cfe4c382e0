"""Shared fixtures: a routing httpx.MockTransport and canned service responses"""

from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

from transport import FetchClient

LOGIN_PAGE_URL = "https://login.live.com/oauth20_authorize.srf"
POST_URL = "https://login.live.com/ppsecure/post.srf"
TOKEN_URL = "https://login.live.com/oauth20_token.srf"
USER_URL = "https://user.auth.xboxlive.com/user/authenticate"
XSTS_URL = "https://xsts.auth.xboxlive.com/xsts/authorize"
DEVICE_URL = "https://device.auth.xboxlive.com/device/authenticate"

LOGIN_PAGE = (
    "<html><head><script>"
    "var ServerData = {urlPost:'https://login.live.com/ppsecure/post.srf?contextid=ABC&bk=1',"
    "sFTTag:'<input type=\"hidden\" name=\"PPFT\" id=\"i0327\" value=\"ppft-value-123\"/>'};"
    "</script></head><body></body></html>"
)

LOGIN_FRAGMENT = (
    "access_token=AT&token_type=bearer&expires_in=3600"
    "&scope=service%3A%3Auser.auth.xboxlive.com%3A%3AMBI_SSL&refresh_token=RT&user_id=UID"
)

LOGIN_COOKIES = [
    ("set-cookie", "MSPRequ=id=N&lt=1; path=/; secure; httponly"),
    ("set-cookie", "uaid=abc123; domain=login.live.com; path=/"),
    ("set-cookie", "MSPOK=$uuid-1; path=/;"),
]

USER_TOKEN_RESPONSE = {
    "IssueInstant": "2024-12-31T00:00:00Z",
    "NotAfter": "2025-01-14T00:00:00Z",
    "Token": "UT",
    "DisplayClaims": {"xui": [{"uhs": "H"}]},
}

XSTS_RESPONSE = {
    "IssueInstant": "2024-12-31T00:00:00Z",
    "NotAfter": "2025-01-01T00:00:00Z",
    "Token": "T",
    "DisplayClaims": {"xui": [{"xid": "X", "uhs": "H", "gtg": "Gamer"}]},
}

Handler = Callable[[httpx.Request], httpx.Response]


class Router:
    """Dispatch mocked requests on (method, url without query)"""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Handler] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, url: str, status_code: int = 200, **kwargs: Any):
        self.routes[(method, url)] = lambda request: httpx.Response(status_code, **kwargs)

    def add_handler(self, method: str, url: str, handler: Handler):
        self.routes[(method, url)] = handler

    def requests_to(self, url: str) -> List[httpx.Request]:
        return [r for r in self.requests if _route_url(r) == url]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, _route_url(request)))
        if handler is None:
            return httpx.Response(404, text=f"not routed: {request.method} {request.url}")
        return handler(request)


def _route_url(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


def login_redirect(fragment: str) -> Dict[str, Any]:
    """Response kwargs for the 302 that carries the Live tokens"""
    return {"headers": {"location": f"https://login.live.com/oauth20_desktop.srf?lc=1033#{fragment}"}}


@pytest.fixture
def router() -> Router:
    return Router()


@pytest.fixture
def http(router) -> FetchClient:
    return FetchClient(transport=httpx.MockTransport(router))


@pytest.fixture
def live_login(router) -> Router:
    """Router serving a login page that accepts the credentials"""
    router.add("GET", LOGIN_PAGE_URL, text=LOGIN_PAGE, headers=LOGIN_COOKIES)
    router.add("POST", POST_URL, 302, **login_redirect(LOGIN_FRAGMENT))
    return router


@pytest.fixture
def xbox_network(live_login) -> Router:
    """Router serving the whole happy path, login to XSTS"""
    live_login.add("POST", USER_URL, json=USER_TOKEN_RESPONSE)
    live_login.add("POST", XSTS_URL, json=XSTS_RESPONSE)
    return live_login
