"""API key registration, login and account commands."""

import structlog
from rich.text import Text

from ..config.context import AppContext
from ..config.settings import load_settings, save_settings
from ..core.errors import InputError
from ..core.types import AccountInfo, Registration, RegistrationRequest
from ..data.client import decode
from ..output.formatters import format_dim
from ..output.tables import print_field, print_heading
from .common import emit_json

logger = structlog.get_logger(__name__)

REGISTER_PATH = "/api/v1/auth/register"
ME_PATH = "/api/v1/auth/me"


async def register(
    ctx: AppContext,
    name: str | None = None,
    email: str | None = None,
    description: str | None = None,
    scope: str | None = None,
) -> Registration | None:
    """Register a new API key, prompting for any field not given.

    Args:
        ctx: Invocation context
        name: Agent or owner name
        email: Contact email
        description: Optional description
        scope: read or full, defaults to read

    Returns:
        Decoded registration, or None in JSON mode
    """
    if name is None:
        name = ctx.prompt("Name: ")
    if email is None:
        email = ctx.prompt("Email: ")
    if description is None:
        description = ctx.prompt("Description (optional): ")
    if scope is None:
        scope = ctx.prompt("Scope [read/full] (default: read): ")
    scope = scope or "read"

    payload = RegistrationRequest(
        name=name.strip(), email=email.strip(), description=description.strip(), scope=scope
    )

    async with ctx.client() as client:
        raw = await client.post_raw(REGISTER_PATH, payload)

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    resp: Registration = decode(raw, Registration)
    console = ctx.console
    logger.info("API key registered", agent_id=resp.agent_id, tier=resp.tier)

    console.print()
    console.print(Text("Registration successful!", style="bold green"))
    print_field(console, "API Key", Text(resp.api_key, style="bold"), width=11)
    print_field(console, "Agent ID", format_dim(resp.agent_id), width=11)
    print_field(console, "Tier", resp.tier, width=11)
    print_field(console, "Rate limit", f"{resp.rate_limit_per_minute} req/min", width=11)
    print_field(console, "Scope", ", ".join(resp.capabilities), width=11)
    if resp.message:
        console.print()
        console.print(Text.assemble("  ", format_dim(resp.message)))
    console.print("\nSave your key with:\n  fti auth login\n", highlight=False)
    return resp


def login(ctx: AppContext, key: str | None = None) -> str:
    """Save an API key to the settings file.

    Args:
        ctx: Invocation context
        key: API key; prompted for when omitted

    Returns:
        The stored key

    Raises:
        InputError: If the key is empty
        ConfigReadError: If the existing settings file is malformed
    """
    if key is None:
        key = ctx.prompt("Paste your API key (ti_live_...): ")
    key = key.strip()
    if not key:
        raise InputError("no API key provided")

    settings = load_settings(ctx.settings_path)
    settings.api_key = key
    path = save_settings(settings, ctx.settings_path)

    logger.info("API key saved", path=str(path))
    ctx.console.print(Text(f"API key saved to {path}", style="green"))
    return key


async def me(ctx: AppContext) -> AccountInfo | None:
    """Show information about the current API key.

    Raises:
        AuthRequiredError: If no API key resolves; no request is made
    """
    key = ctx.require_api_key()

    async with ctx.client(key) as client:
        raw = await client.get_raw(ME_PATH)

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    resp: AccountInfo = decode(raw, AccountInfo)
    console = ctx.console

    console.print()
    print_heading(console, resp.name)
    print_field(console, "Agent ID", format_dim(resp.agent_id), width=14)
    print_field(console, "Tier", Text(resp.tier, style="cyan"), width=14)
    print_field(console, "Scope", ", ".join(resp.capabilities), width=14)
    print_field(console, "Rate limit", f"{resp.rate_limit_per_minute} req/min", width=14)
    print_field(console, "Total calls", str(resp.total_requests), width=14)
    if resp.description:
        print_field(console, "Description", resp.description, width=14)
    print_field(console, "Created", format_dim(resp.created_at), width=14)
    console.print()
    return resp
