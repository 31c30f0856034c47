"""Token market data commands."""

import structlog
from rich.text import Text

from ..config.context import AppContext
from ..core.types import TokenDetail, TokenList, TokenListItem
from ..data.client import decode
from ..output.formatters import (
    format_change,
    format_dim,
    format_grade,
    format_holder_delta,
    format_price,
    format_symbol,
    format_volume,
    truncate,
)
from ..output.tables import make_table, print_field, print_heading, print_table
from .common import build_query, emit_json

logger = structlog.get_logger(__name__)

TOKENS_PATH = "/api/tokens"


def token_path(symbol: str) -> str:
    return f"{TOKENS_PATH}/{symbol.upper()}"


async def list_tokens(
    ctx: AppContext, sort_by: str = "volume_24h", order: str = "desc"
) -> list[TokenListItem] | None:
    """List all fan tokens with market metrics.

    Args:
        ctx: Invocation context
        sort_by: Sort field (volume_24h, price_change_24h, market_cap, health_score)
        order: Sort order (asc, desc)

    Returns:
        Decoded tokens, or None in JSON mode
    """
    params = build_query({"sort_by": sort_by, "order": order})

    async with ctx.client() as client:
        raw = await client.get_raw(TOKENS_PATH, params)

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    tokens = decode(raw, TokenList)
    logger.debug("Tokens listed", count=len(tokens))

    table = make_table(
        "SYMBOL", "NAME", "PRICE", "1H%", "24H%", "VOLUME", "MCAP", "HEALTH"
    )
    for tk in tokens:
        table.add_row(
            format_symbol(tk.symbol),
            Text(truncate(tk.name, 22)),
            format_price(tk.price),
            format_change(tk.price_change_1h),
            format_change(tk.price_change_24h),
            format_volume(tk.volume_24h),
            format_volume(tk.market_cap),
            format_grade(tk.health_grade, tk.health_score),
        )
    print_table(ctx.console, table)
    ctx.console.print(f"\n{len(tokens)} tokens", highlight=False)
    return tokens


async def get_token(ctx: AppContext, symbol: str) -> TokenDetail | None:
    """Show detailed info for one token.

    Args:
        ctx: Invocation context
        symbol: Token symbol, any case

    Returns:
        Decoded detail, or None in JSON mode
    """
    async with ctx.client() as client:
        raw = await client.get_raw(token_path(symbol))

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    detail: TokenDetail = decode(raw, TokenDetail)
    render_token_detail(ctx, detail)
    return detail


def render_token_detail(ctx: AppContext, detail: TokenDetail) -> None:
    console = ctx.console
    tk = detail.token
    m = detail.metrics

    console.print()
    print_heading(console, f"{tk.symbol} — {tk.name}")
    print_field(console, "Team", tk.team, width=10)
    print_field(console, "League", tk.league, width=10)
    print_field(console, "Country", tk.country, width=10)
    if tk.launch_date:
        print_field(console, "Launch", format_dim(tk.launch_date), width=10)

    console.print()
    print_heading(console, "Market")
    print_field(console, "Price", format_price(m.price))
    print_field(
        console,
        "1h / 24h",
        Text.assemble(
            format_change(m.price_change_1h), " / ", format_change(m.price_change_24h)
        ),
    )
    print_field(console, "7d", format_change(m.price_change_7d))
    print_field(console, "Volume 24h", format_volume(m.volume_24h))
    print_field(console, "Market cap", format_volume(m.market_cap))
    print_field(
        console,
        "Holders",
        Text.assemble(
            f"{m.total_holders} (", format_holder_delta(m.holder_change_24h), " 24h)"
        ),
    )
    print_field(console, "Health", format_grade(m.health_grade, m.health_score))
    print_field(
        console,
        "Liquidity",
        Text.assemble(
            format_volume(m.liquidity_1pct), f"  Spread: {m.spread_bps:.1f} bps"
        ),
    )

    if detail.exchanges:
        console.print()
        print_heading(console, "Exchanges")
        table = make_table("EXCHANGE", "PRICE", "VOLUME", "BID", "ASK", "SPREAD")
        for ex in detail.exchanges:
            table.add_row(
                Text(ex.name),
                format_price(ex.price),
                format_volume(ex.volume_24h),
                format_price(ex.best_bid),
                format_price(ex.best_ask),
                f"{ex.spread_bps:.1f} bps",
            )
        print_table(console, table)
    console.print()
