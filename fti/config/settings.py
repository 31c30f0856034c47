"""Persisted CLI settings and credential resolution."""

import os
import tempfile
import tomllib
from pathlib import Path

import structlog
import tomli_w
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.errors import ConfigReadError

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://web-production-ad7c4.up.railway.app"
CONFIG_DIR_NAME = ".fti"
CONFIG_FILE_NAME = "config.toml"


class Settings(BaseModel):
    """Settings stored in ~/.fti/config.toml."""

    api_key: str = Field(default="", description="API key for protected endpoints")
    api_url: str = Field(default="", description="Base URL override")

    model_config = {"extra": "ignore"}


class EnvOverrides(BaseSettings):
    """Environment variables that override the stored settings."""

    api_key: str = Field(default="", description="FTI_API_KEY")
    api_url: str = Field(default="", description="FTI_API_URL")

    model_config = SettingsConfigDict(
        env_prefix="FTI_", case_sensitive=False, extra="ignore"
    )


def config_path() -> Path:
    """Return the fixed settings path under the user's home directory."""
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from TOML.

    Args:
        path: Settings file, defaults to config_path()

    Returns:
        Stored settings, or empty settings when the file does not exist

    Raises:
        ConfigReadError: If the file exists but cannot be parsed
    """
    settings_file = path or config_path()
    if not settings_file.exists():
        logger.debug("No settings file", path=str(settings_file))
        return Settings()

    try:
        with open(settings_file, "rb") as f:
            data = tomllib.load(f)
        return Settings(**data)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        logger.warning("Failed to parse settings file", path=str(settings_file))
        raise ConfigReadError(f"reading config {settings_file}: {e}") from e
    except ValidationError as e:
        logger.warning("Invalid settings file", path=str(settings_file))
        raise ConfigReadError(f"reading config {settings_file}: {e}") from e
    except OSError as e:
        raise ConfigReadError(f"reading config {settings_file}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write settings to TOML, replacing the previous file in one step.

    Args:
        settings: Settings to persist
        path: Settings file, defaults to config_path()

    Returns:
        Path that was written
    """
    settings_file = path or config_path()
    settings_file.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    payload = tomli_w.dumps(settings.model_dump())
    fd, tmp_name = tempfile.mkstemp(
        dir=settings_file.parent, prefix=".config-", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, settings_file)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.debug("Settings saved", path=str(settings_file))
    return settings_file


def resolve_api_key(override: str | None = None, path: Path | None = None) -> str:
    """Resolve the API key.

    Precedence: override, FTI_API_KEY, stored api_key. An empty result means
    the caller is unauthenticated.
    """
    if override:
        return override
    env = EnvOverrides()
    if env.api_key:
        return env.api_key
    return load_settings(path).api_key


def resolve_base_url(override: str | None = None, path: Path | None = None) -> str:
    """Resolve the API base URL.

    Precedence: override, FTI_API_URL, stored api_url, DEFAULT_BASE_URL.
    """
    url = override or EnvOverrides().api_url
    if not url:
        url = load_settings(path).api_url or DEFAULT_BASE_URL
    return url.rstrip("/")
