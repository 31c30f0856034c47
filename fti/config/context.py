"""Per-invocation context threaded into every command handler."""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from ..core.errors import AuthRequiredError
from ..data.client import ApiClient
from .settings import resolve_api_key, resolve_base_url


@dataclass(frozen=True)
class AppContext:
    """Options shared by all commands of one invocation.

    Attributes:
        api_key_override: Value of --api-key, empty when not given
        json_output: Print raw JSON instead of tables
        settings_path: Settings file, None for ~/.fti/config.toml
        base_url_override: Base URL that wins over env and file
        console: Destination for command output
        err_console: Destination for error messages
        ask: Line reader for interactive prompts, defaults to console.input
    """

    api_key_override: str = ""
    json_output: bool = False
    settings_path: Path | None = None
    base_url_override: str = ""
    console: Console = field(default_factory=Console)
    err_console: Console = field(default_factory=lambda: Console(stderr=True))
    ask: Callable[[str], str] | None = None

    def api_key(self) -> str:
        return resolve_api_key(self.api_key_override, self.settings_path)

    def require_api_key(self) -> str:
        """Resolve the API key or fail before any request is made.

        Raises:
            AuthRequiredError: If no key resolves from flag, env or file
        """
        key = self.api_key()
        if not key:
            raise AuthRequiredError()
        return key

    def base_url(self) -> str:
        return resolve_base_url(self.base_url_override, self.settings_path)

    def client(self, api_key: str = "") -> ApiClient:
        """Build an API client for the resolved base URL."""
        return ApiClient(self.base_url(), api_key=api_key)

    def prompt(self, text: str) -> str:
        reader = self.ask or self.console.input
        return reader(text).strip()
