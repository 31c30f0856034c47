"""Helpers shared by command handlers."""

from ..config.context import AppContext
from ..output.tables import print_json


def build_query(params: dict[str, str | None]) -> dict[str, str]:
    """Build query parameters, omitting unset filters.

    Args:
        params: Candidate parameters; empty strings and None are dropped

    Returns:
        Parameters safe to send
    """
    return {k: v for k, v in params.items() if v is not None and v != ""}


def emit_json(ctx: AppContext, raw: bytes) -> None:
    print_json(ctx.console, raw)
