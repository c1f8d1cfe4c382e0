import os
import platform
import stat

import pytest

from live import LiveAuthResponse, TokenStore, refresh_access_token
from utils.storage import FileTokenStore


@pytest.fixture
def store(tmp_path) -> FileTokenStore:
    return FileTokenStore(str(tmp_path / "tokens" / "live_tokens.json"))


def test_empty_store(store):
    assert store.get_refresh_token() is None
    assert store.get_access_token() is None
    assert store.is_token_expired()
    assert store.get_status()["has_tokens"] is False


def test_save_and_load(store):
    store.save(LiveAuthResponse(access_token="AT", expires_in=3600, refresh_token="RT", user_id="UID"))

    tokens = store.load_tokens()
    assert tokens["access_token"] == "AT"
    assert tokens["refresh_token"] == "RT"
    assert tokens["user_id"] == "UID"
    assert store.get_access_token() == "AT"
    assert store.get_refresh_token() == "RT"

    status = store.get_status()
    assert status["has_tokens"] is True
    assert status["has_refresh_token"] is True
    assert status["is_expired"] is False


def test_save_keeps_previous_refresh_token(store):
    store.save(LiveAuthResponse(access_token="AT1", expires_in=3600, refresh_token="RT"))
    store.save(LiveAuthResponse(access_token="AT2", expires_in=3600))

    assert store.get_access_token() == "AT2"
    assert store.get_refresh_token() == "RT"


def test_expired_access_token_is_not_returned(store):
    store.save(LiveAuthResponse(access_token="AT", expires_in=0, refresh_token="RT"))

    assert store.get_access_token() is None
    assert store.get_refresh_token() == "RT"
    assert store.get_status()["is_expired"] is True


def test_corrupt_file_reads_as_empty(store):
    store.token_file.write_text("{not json")

    assert store.load_tokens() is None


def test_clear_tokens(store):
    store.save(LiveAuthResponse(access_token="AT", expires_in=60))
    store.clear_tokens()

    assert not store.token_file.exists()


@pytest.mark.skipif(platform.system() == "Windows", reason="POSIX permissions")
def test_file_permissions(store):
    store.save(LiveAuthResponse(access_token="AT", expires_in=60))

    assert stat.S_IMODE(os.stat(store.token_file).st_mode) == 0o600
    assert stat.S_IMODE(os.stat(store.token_file.parent).st_mode) == 0o700


def test_file_store_is_a_token_store(store):
    assert isinstance(store, TokenStore)


async def test_refresh_with_file_store(store, router, http):
    router.add("POST", "https://login.live.com/oauth20_token.srf", json={"access_token": "AT2", "expires_in": 3600})
    store.save(LiveAuthResponse(access_token="AT1", expires_in=0, refresh_token="RT"))

    await refresh_access_token(None, token_store=store, http=http)

    assert store.get_access_token() == "AT2"
    assert store.get_refresh_token() == "RT"
