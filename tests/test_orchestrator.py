from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from conftest import POST_URL, USER_URL, XSTS_RESPONSE, XSTS_URL
from errors import ExchangeFailureError, InvalidCredentialsError
from live import LiveAuthResponse
from xbox_auth import (
    AuthenticateOptions,
    AuthenticateRawResponse,
    AuthenticateResponse,
    authenticate,
    authenticate_sync,
    http_client,
)
from xbox_auth.models import LIVE_HOST, USER_HOST, XSTS_HOST


async def test_full_flow_simplified(xbox_network, http):
    result = await authenticate("player@example.com", "hunter2", http=http)

    assert isinstance(result, AuthenticateResponse)
    assert result.kind == "simplified"
    assert result.xuid == "X"
    assert result.user_hash == "H"
    assert result.xsts_token == "T"
    assert result.expires_on == "2025-01-01T00:00:00Z"
    assert result.display_claims == XSTS_RESPONSE["DisplayClaims"]
    assert result.authorization_header == "XBL3.0 x=H;T"


async def test_full_flow_wire_order(xbox_network, http):
    await authenticate("player@example.com", "hunter2", http=http)

    paths = [(r.method, r.url.host) for r in xbox_network.requests]
    assert paths == [
        ("GET", "login.live.com"),
        ("POST", "login.live.com"),
        ("POST", "user.auth.xboxlive.com"),
        ("POST", "xsts.auth.xboxlive.com"),
    ]
    (user_request,) = xbox_network.requests_to(USER_URL)
    assert b'"RpsTicket":"t=AT"' in user_request.content.replace(b" ", b"")
    (xsts_request,) = xbox_network.requests_to(XSTS_URL)
    assert b'"UserTokens":["UT"]' in xsts_request.content.replace(b" ", b"")


async def test_full_flow_raw(xbox_network, http):
    result = await authenticate("player@example.com", "hunter2", {"raw": True}, http=http)

    assert isinstance(result, AuthenticateRawResponse)
    assert result.kind == "raw"
    assert set(result.responses) == {LIVE_HOST, USER_HOST, XSTS_HOST}
    assert result.responses[LIVE_HOST].access_token == "AT"
    assert result.responses[USER_HOST]["Token"] == "UT"
    assert result.responses[XSTS_HOST] == XSTS_RESPONSE
    assert result.to_dict()[LIVE_HOST]["refresh_token"] == "RT"


async def test_missing_xid_gives_null_xuid(xbox_network, http):
    xbox_network.add("POST", XSTS_URL, json={**XSTS_RESPONSE, "DisplayClaims": {"xui": [{"uhs": "H"}]}})

    result = await authenticate("player@example.com", "hunter2", http=http)

    assert result.xuid is None
    assert result.user_hash == "H"


async def test_device_and_title_tokens_are_forwarded(xbox_network, http):
    await authenticate(
        "player@example.com",
        "hunter2",
        AuthenticateOptions(device_token="DT", title_token="TT", sandbox_id="XDKS.1"),
        http=http,
    )

    (xsts_request,) = xbox_network.requests_to(XSTS_URL)
    body = xsts_request.content.replace(b" ", b"")
    assert b'"DeviceToken":"DT"' in body
    assert b'"TitleToken":"TT"' in body
    assert b'"SandboxId":"XDKS.1"' in body


async def test_invalid_options_fail_before_any_request(router, http):
    with pytest.raises(ValidationError):
        await authenticate("player@example.com", "hunter2", {"titleToken": "TT"}, http=http)

    assert router.requests == []


async def test_invalid_email_fails_before_any_request(router, http):
    with pytest.raises(ValueError):
        await authenticate("not-an-email", "hunter2", http=http)

    assert router.requests == []


async def test_credential_failure_stops_the_flow(live_login, http):
    live_login.add("POST", POST_URL, 200, text="<html>wrong password</html>")

    with pytest.raises(InvalidCredentialsError):
        await authenticate("player@example.com", "hunter2", http=http)

    assert live_login.requests_to(USER_URL) == []


async def test_xsts_failure_is_raised_unchanged(xbox_network, http):
    xbox_network.add("POST", XSTS_URL, 401, json={"XErr": 2148916238})

    with pytest.raises(ExchangeFailureError) as excinfo:
        await authenticate("player@example.com", "hunter2", http=http)

    assert excinfo.value.xerr == 2148916238


@pytest.mark.parametrize("xsts_body", [
    {**XSTS_RESPONSE, "DisplayClaims": {"xui": []}},
    {"Token": "T", "NotAfter": "N"},
    {"DisplayClaims": {"xui": [{"uhs": "H"}]}, "NotAfter": "N"},
])
async def test_incomplete_xsts_response_is_exchange_failure(xbox_network, http, xsts_body):
    xbox_network.add("POST", XSTS_URL, json=xsts_body)

    with pytest.raises(ExchangeFailureError) as excinfo:
        await authenticate("player@example.com", "hunter2", http=http)

    assert excinfo.value.extra["url"] == XSTS_URL
    assert excinfo.value.extra["response"]["body"] == xsts_body


async def test_incomplete_xsts_response_is_returned_raw(xbox_network, http):
    xbox_network.add("POST", XSTS_URL, json={"DisplayClaims": {"xui": []}})

    result = await authenticate("player@example.com", "hunter2", {"raw": True}, http=http)

    assert result.responses[XSTS_HOST] == {"DisplayClaims": {"xui": []}}


async def test_user_token_without_token_stops_before_xsts(xbox_network, http):
    xbox_network.add("POST", USER_URL, json={"DisplayClaims": {"xui": [{"uhs": "H"}]}})

    with pytest.raises(ExchangeFailureError) as excinfo:
        await authenticate("player@example.com", "hunter2", http=http)

    assert excinfo.value.extra["url"] == USER_URL
    assert xbox_network.requests_to(XSTS_URL) == []


async def test_steps_receive_expected_arguments():
    live_response = LiveAuthResponse(access_token="AT", expires_in=3600)
    user_response = {"Token": "UT", "DisplayClaims": {"xui": [{"uhs": "H"}]}}
    xsts_response = {"Token": "T", "NotAfter": "N", "DisplayClaims": {"xui": [{"xid": "", "uhs": "H"}]}}

    with patch("xbox_auth.orchestrator.authenticate_with_credentials", AsyncMock(return_value=live_response)) as credentials, \
            patch("xbox_auth.orchestrator.exchange_rps_ticket_for_user_token", AsyncMock(return_value=user_response)) as user_token, \
            patch("xbox_auth.orchestrator.exchange_tokens_for_xsts_token", AsyncMock(return_value=xsts_response)) as xsts:
        result = await authenticate("player@example.com", "hunter2", {"XSTSRelyingParty": "rp://x/"})

    assert credentials.await_args.args[0].email == "player@example.com"
    assert user_token.await_args.args[:2] == ("AT", "t")
    tokens, options = xsts.await_args.args
    assert tokens.user_tokens == ["UT"]
    assert tokens.device_token is None
    assert options.xsts_relying_party == "rp://x/"
    # empty xid claim is treated as missing
    assert result.xuid is None


def test_authenticate_sync(xbox_network, http):
    result = authenticate_sync("player@example.com", "hunter2", http=http)

    assert result.xuid == "X"


def test_http_client_namespace():
    from transport import FetchClient, XSAPIFetchClient

    assert http_client.Base is FetchClient
    assert http_client.XSAPI is XSAPIFetchClient
