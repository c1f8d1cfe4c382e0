import pytest

from config.loader import ConfigLoader


@pytest.fixture
def loader(tmp_path) -> ConfigLoader:
    return ConfigLoader(env_path=str(tmp_path / ".env"))


def test_defaults_when_unset(loader, monkeypatch):
    monkeypatch.delenv("XBOX_AUTH_TEST_VALUE", raising=False)

    assert loader.get("XBOX_AUTH_TEST_VALUE", 10.0) == 10.0
    assert loader.get("XBOX_AUTH_TEST_VALUE", ["a"]) == ["a"]


@pytest.mark.parametrize(
    "raw, default, expected",
    [
        ("2.5", 10.0, 2.5),
        ("7", 3, 7),
        ("yes", False, True),
        ("0", True, False),
        ("x", 10.0, 10.0),
        ("1", "0", "1"),
        ("identity/confirm, Abuse?mkt= ,,", [], ["identity/confirm", "Abuse?mkt="]),
    ],
)
def test_env_values_are_typed(loader, monkeypatch, raw, default, expected):
    monkeypatch.setenv("XBOX_AUTH_TEST_VALUE", raw)

    assert loader.get("XBOX_AUTH_TEST_VALUE", default) == expected


def test_get_list(loader, monkeypatch):
    monkeypatch.setenv("XBOX_AUTH_TEST_VALUE", "a,b")

    assert loader.get_list("XBOX_AUTH_TEST_VALUE", ("x",)) == ["a", "b"]


def test_home_paths_are_expanded(loader, monkeypatch):
    monkeypatch.delenv("XBOX_AUTH_TEST_VALUE", raising=False)

    assert not loader.get("XBOX_AUTH_TEST_VALUE", "~/tokens.json").startswith("~")


def test_env_file_is_loaded(tmp_path, monkeypatch):
    monkeypatch.delenv("XBOX_AUTH_FROM_FILE", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("XBOX_AUTH_FROM_FILE=15\n")

    loader = ConfigLoader(env_path=str(env_file))

    assert loader.get("XBOX_AUTH_FROM_FILE", 10.0) == 15.0
    monkeypatch.delenv("XBOX_AUTH_FROM_FILE", raising=False)
