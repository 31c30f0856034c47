"""Tests for settings persistence and credential resolution."""

import stat

import pytest

from fti.config.settings import (
    DEFAULT_BASE_URL,
    Settings,
    config_path,
    load_settings,
    resolve_api_key,
    resolve_base_url,
    save_settings,
)
from fti.core.errors import ConfigReadError


def test_config_path_under_home(tmp_path) -> None:
    """Test that the settings file lives in ~/.fti/config.toml."""
    assert config_path() == tmp_path / "home" / ".fti" / "config.toml"


def test_load_missing_file_returns_empty(settings_path) -> None:
    """Test that a missing settings file is not an error."""
    settings = load_settings(settings_path)

    assert settings == Settings()
    assert settings.api_key == ""
    assert settings.api_url == ""


@pytest.mark.parametrize(
    "api_key,api_url",
    [
        ("ti_live_abc", "https://example.test"),
        ("ti_live_abc", ""),
        ("", "https://example.test"),
        ("", ""),
        ('quo"te\\key', "https://example.test/with path"),
    ],
)
def test_save_then_load_round_trip(settings_path, api_key, api_url) -> None:
    """Test that saved settings load back unchanged."""
    saved = Settings(api_key=api_key, api_url=api_url)
    save_settings(saved, settings_path)

    assert load_settings(settings_path) == saved


def test_save_creates_private_directory(settings_path) -> None:
    """Test that the settings directory is created owner-only."""
    save_settings(Settings(api_key="k"), settings_path)

    dir_mode = stat.S_IMODE(settings_path.parent.stat().st_mode)
    file_mode = stat.S_IMODE(settings_path.stat().st_mode)
    assert dir_mode == 0o700
    assert file_mode == 0o600


def test_save_overwrites_and_leaves_no_temp_files(settings_path) -> None:
    """Test that saving twice keeps only the final content."""
    save_settings(Settings(api_key="first"), settings_path)
    save_settings(Settings(api_key="second"), settings_path)

    assert load_settings(settings_path).api_key == "second"
    assert [p.name for p in settings_path.parent.iterdir()] == ["config.toml"]


def test_save_writes_toml_keys(settings_path) -> None:
    """Test the on-disk field names."""
    save_settings(Settings(api_key="k1", api_url="https://u.test"), settings_path)

    content = settings_path.read_text(encoding="utf-8")
    assert 'api_key = "k1"' in content
    assert 'api_url = "https://u.test"' in content


def test_load_malformed_file_raises(settings_path) -> None:
    """Test that an unparsable file raises ConfigReadError."""
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("api_key = \n[[broken", encoding="utf-8")

    with pytest.raises(ConfigReadError):
        load_settings(settings_path)


def test_load_wrong_type_raises(settings_path) -> None:
    """Test that a non-string key raises ConfigReadError."""
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("api_key = [1, 2]\n", encoding="utf-8")

    with pytest.raises(ConfigReadError):
        load_settings(settings_path)


def test_load_ignores_unknown_keys(settings_path) -> None:
    """Test that extra keys in the file are tolerated."""
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(
        'api_key = "k"\ntheme = "dark"\n', encoding="utf-8"
    )

    assert load_settings(settings_path).api_key == "k"


def test_api_key_precedence(settings_path, monkeypatch) -> None:
    """Test override > env > file > empty."""
    save_settings(Settings(api_key="Z"), settings_path)
    monkeypatch.setenv("FTI_API_KEY", "Y")

    assert resolve_api_key("X", settings_path) == "X"
    assert resolve_api_key(None, settings_path) == "Y"
    assert resolve_api_key("", settings_path) == "Y"

    monkeypatch.delenv("FTI_API_KEY")
    assert resolve_api_key(None, settings_path) == "Z"

    settings_path.unlink()
    assert resolve_api_key(None, settings_path) == ""


def test_empty_env_key_falls_through(settings_path, monkeypatch) -> None:
    """Test that an empty FTI_API_KEY counts as unset."""
    save_settings(Settings(api_key="Z"), settings_path)
    monkeypatch.setenv("FTI_API_KEY", "")

    assert resolve_api_key(None, settings_path) == "Z"


def test_base_url_precedence(settings_path, monkeypatch) -> None:
    """Test override > env > file > default for the base URL."""
    assert resolve_base_url(None, settings_path) == DEFAULT_BASE_URL

    save_settings(Settings(api_url="https://file.test"), settings_path)
    assert resolve_base_url(None, settings_path) == "https://file.test"

    monkeypatch.setenv("FTI_API_URL", "https://env.test/")
    assert resolve_base_url(None, settings_path) == "https://env.test"

    assert resolve_base_url("https://override.test", settings_path) == (
        "https://override.test"
    )


def test_resolution_is_idempotent(settings_path, monkeypatch) -> None:
    """Test that resolving twice without writes gives the same answer."""
    save_settings(Settings(api_key="file-key", api_url="https://f.test"), settings_path)
    monkeypatch.setenv("FTI_API_URL", "https://env.test")

    assert resolve_api_key(None, settings_path) == resolve_api_key(
        None, settings_path
    )
    assert resolve_base_url(None, settings_path) == resolve_base_url(
        None, settings_path
    )


def test_resolve_api_key_propagates_config_errors(settings_path) -> None:
    """Test that a malformed file surfaces while resolving a key."""
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("not toml at all = = =", encoding="utf-8")

    with pytest.raises(ConfigReadError):
        resolve_api_key(None, settings_path)

    assert resolve_api_key("flag", settings_path) == "flag"
