"""Current and historical price commands."""

from rich.text import Text

from ..config.context import AppContext
from ..core.types import PriceHistory, TokenDetail
from ..data.client import decode
from ..output.formatters import (
    format_change,
    format_dim,
    format_price,
    format_volume,
    short_time,
)
from ..output.tables import make_table, print_field, print_heading, print_table
from .common import build_query, emit_json
from .tokens import token_path


async def current_price(ctx: AppContext, symbol: str) -> TokenDetail | None:
    """Show the current price and recent changes for a token."""
    async with ctx.client() as client:
        raw = await client.get_raw(token_path(symbol))

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    detail: TokenDetail = decode(raw, TokenDetail)
    m = detail.metrics
    console = ctx.console

    console.print()
    print_heading(console, f"{detail.token.symbol}  {detail.token.name}")
    console.print()
    print_field(console, "Price", format_price(m.price), width=8)
    print_field(console, "1h", format_change(m.price_change_1h), width=8)
    print_field(console, "24h", format_change(m.price_change_24h), width=8)
    print_field(console, "7d", format_change(m.price_change_7d), width=8)
    print_field(console, "Vol 24h", format_volume(m.volume_24h), width=8)
    console.print()
    return detail


async def price_history(
    ctx: AppContext,
    symbol: str,
    days: int = 7,
    interval: str = "1h",
    limit: int = 0,
) -> PriceHistory | None:
    """Show historical price candles for a token.

    Args:
        ctx: Invocation context
        symbol: Token symbol, any case
        days: Number of days of history
        interval: Candle interval (1h, 4h, 1d)
        limit: Max rows to display, 0 for all; keeps the most recent rows

    Returns:
        Decoded history, or None in JSON mode
    """
    symbol = symbol.upper()
    params = build_query({"interval": interval, "days": str(days)})

    async with ctx.client() as client:
        raw = await client.get_raw(f"{token_path(symbol)}/history", params)

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    history: PriceHistory = decode(raw, PriceHistory)
    console = ctx.console

    console.print()
    print_heading(
        console, f"{symbol} price history — last {days} days ({interval} interval)"
    )
    console.print()

    rows = history.prices
    if limit > 0 and len(rows) > limit:
        rows = rows[-limit:]

    table = make_table("TIME", "PRICE", "VOLUME", "SPREAD")
    for point in rows:
        table.add_row(
            format_dim(short_time(point.time)),
            format_price(point.price),
            format_volume(point.volume),
            Text(f"{point.spread:.1f} bps"),
        )
    print_table(console, table)
    console.print(f"\n{history.data_points} data points", highlight=False)
    return history
