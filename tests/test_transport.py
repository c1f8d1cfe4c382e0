import httpx
import pytest

from errors import TransportError, TransportTimeoutError
from transport import FetchClient, XSAPIFetchClient, as_xsapi_client, calculate_timeout


@pytest.mark.parametrize(
    "requested, expected",
    [
        (None, 10.0),
        (0.2, 1.0),
        (5, 5.0),
        (120, 30.0),
    ],
)
def test_calculate_timeout_clamps(requested, expected):
    assert calculate_timeout(requested) == expected


def _client(handler, cls=FetchClient):
    return cls(transport=httpx.MockTransport(handler))


async def test_json_response_is_decoded():
    client = _client(lambda request: httpx.Response(200, json={"ok": True}))

    response = await client.get("https://example.test/api")

    assert response.status_code == 200
    assert response.data == {"ok": True}


async def test_text_response_when_json_not_requested():
    client = _client(lambda request: httpx.Response(200, text="<html>hi</html>"))

    response = await client.get("https://example.test/page", parse_json=False)

    assert response.data == "<html>hi</html>"


async def test_error_status_raises_transport_error_with_body():
    client = _client(lambda request: httpx.Response(401, json={"XErr": 2148916233}, headers={"x-err": "1"}))

    with pytest.raises(TransportError) as excinfo:
        await client.post("https://example.test/api", json={})

    error = excinfo.value
    assert error.code == "REQUEST_ERROR"
    assert error.status_code == 401
    assert error.body == {"XErr": 2148916233}
    assert error.extra["response"]["headers"]["x-err"] == "1"


async def test_error_status_keeps_text_body():
    client = _client(lambda request: httpx.Response(500, text="upstream down"))

    with pytest.raises(TransportError) as excinfo:
        await client.get("https://example.test/api")

    assert excinfo.value.body == "upstream down"


async def test_redirect_returned_when_not_followed():
    client = _client(lambda request: httpx.Response(302, headers={"location": "https://example.test/next#a=1"}))

    response = await client.post("https://example.test/login", data={"a": "b"}, follow_redirects=False)

    assert response.status_code == 302
    assert response.data is None
    assert response.headers["location"] == "https://example.test/next#a=1"


async def test_timeout_maps_to_timeout_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(TransportTimeoutError) as excinfo:
        await _client(handler).get("https://example.test/slow")

    assert excinfo.value.code == "TIMEOUT_ERROR"
    assert excinfo.value.status_code is None


async def test_network_failure_maps_to_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as excinfo:
        await _client(handler).get("https://example.test/down")

    assert excinfo.value.code == "NETWORK_ERROR"
    assert not isinstance(excinfo.value, TransportTimeoutError)


async def test_invalid_json_raises_parse_error():
    client = _client(lambda request: httpx.Response(200, text="not json"))

    with pytest.raises(TransportError) as excinfo:
        await client.get("https://example.test/api")

    assert excinfo.value.code == "PARSE_ERROR"


async def test_set_cookie_headers_are_kept_in_order():
    client = _client(lambda request: httpx.Response(
        200,
        text="",
        headers=[("set-cookie", "a=1; path=/"), ("set-cookie", "b=2")],
    ))

    response = await client.get("https://example.test/", parse_json=False)

    assert response.set_cookies == ["a=1; path=/", "b=2"]


async def test_xsapi_client_headers():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, json={})

    client = _client(handler, XSAPIFetchClient)
    await client.post(
        "https://xsts.auth.xboxlive.com/xsts/authorize",
        json={},
        headers={"X-Custom": "yes"},
        signature="SIG",
    )

    assert seen["x-xbl-contract-version"] == "0"
    assert seen["accept"] == "application/json"
    assert seen["signature"] == "SIG"
    assert seen["x-custom"] == "yes"
    assert "authorization" not in seen


def test_xsapi_authorization_header():
    client = XSAPIFetchClient()

    headers = client.create_headers(xsts_token="TOKEN", user_hash="HASH", contract_version=2)

    assert headers["Authorization"] == "XBL3.0 x=HASH;TOKEN"
    assert headers["X-Xbl-Contract-Version"] == "2"


def test_as_xsapi_client_keeps_settings():
    transport = httpx.MockTransport(lambda request: httpx.Response(200))
    base = FetchClient(timeout=3, transport=transport, user_agent="UA")

    client = as_xsapi_client(base)

    assert isinstance(client, XSAPIFetchClient)
    assert client.timeout == 3.0
    assert client.transport is transport
    assert client.user_agent == "UA"
    assert as_xsapi_client(client) is client
