"""Trading signal commands (API key required)."""

import structlog
from rich.text import Text

from ..config.context import AppContext
from ..core.types import ActiveSignals, SignalHistory
from ..data.client import decode
from ..output.formatters import (
    format_confidence,
    format_direction,
    format_outcome,
    format_pnl,
    format_price,
    format_symbol,
    format_tier,
    short_time,
)
from ..output.tables import make_table, print_dim, print_heading, print_table
from .common import build_query, emit_json

logger = structlog.get_logger(__name__)

ACTIVE_PATH = "/api/v1/signals/active"
HISTORY_PATH = "/api/v1/signals/history"


async def active_signals(
    ctx: AppContext, token: str = "", min_confidence: float = 0.65
) -> ActiveSignals | None:
    """Show currently active trading signals.

    Args:
        ctx: Invocation context
        token: Optional token symbol filter
        min_confidence: Minimum confidence in [0, 1]

    Returns:
        Decoded signals, or None in JSON mode

    Raises:
        AuthRequiredError: If no API key resolves; no request is made
    """
    key = ctx.require_api_key()
    params = build_query(
        {"min_confidence": f"{min_confidence:.2f}", "token": token.upper()}
    )

    async with ctx.client(key) as client:
        raw = await client.get_raw(ACTIVE_PATH, params)

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    resp: ActiveSignals = decode(raw, ActiveSignals)
    console = ctx.console

    if resp.active_signals == 0:
        console.print()
        print_dim(console, "No active signals.")
        return resp

    console.print()
    print_heading(console, f"{resp.active_signals} active signal(s)")
    console.print()
    table = make_table(
        "TOKEN", "DIR", "TIER", "CONF", "ENTRY", "TARGET", "STOP", "MAX%", "EXPIRES"
    )
    for s in resp.signals:
        table.add_row(
            format_symbol(s.token),
            format_direction(s.direction),
            format_tier(s.tier),
            format_confidence(s.confidence_score),
            format_price(s.entry_price),
            format_price(s.target_price),
            format_price(s.stop_price),
            Text(f"{s.max_profit_pct:.1f}%"),
            Text(short_time(s.expires_at)),
        )
    print_table(console, table)
    console.print()
    return resp


async def signal_history(
    ctx: AppContext,
    token: str = "",
    days: int = 30,
    outcome: str = "",
    limit: int = 50,
) -> SignalHistory | None:
    """Show historical signal performance.

    Args:
        ctx: Invocation context
        token: Optional token symbol filter
        days: Look-back period in days
        outcome: Optional outcome filter (target_hit, stopped_out, expired)
        limit: Max results

    Returns:
        Decoded history, or None in JSON mode

    Raises:
        AuthRequiredError: If no API key resolves; no request is made
    """
    key = ctx.require_api_key()
    params = build_query(
        {
            "days": str(days),
            "limit": str(limit),
            "token": token.upper(),
            "outcome": outcome,
        }
    )

    async with ctx.client(key) as client:
        raw = await client.get_raw(HISTORY_PATH, params)

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    resp: SignalHistory = decode(raw, SignalHistory)
    console = ctx.console

    if not resp.signals:
        console.print()
        print_dim(console, "No signal history found.")
        return resp

    console.print()
    print_heading(console, f"{len(resp.signals)} signal(s) — last {days} days")
    console.print()
    table = make_table(
        "TOKEN", "TIER", "CONF", "ENTRY", "EXIT", "PNL%", "OUTCOME", "DATE"
    )
    for s in resp.signals:
        table.add_row(
            format_symbol(s.token),
            format_tier(s.tier),
            format_confidence(s.confidence_score),
            format_price(s.entry_price),
            format_price(s.exit_price),
            format_pnl(s.pnl_pct),
            format_outcome(s.outcome_status),
            Text(short_time(s.created_at)),
        )
    print_table(console, table)
    console.print()
    logger.debug("Signal history rendered", count=len(resp.signals))
    return resp
