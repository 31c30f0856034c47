"""CEX + DEX whale trade activity, with an optional watch mode."""

import asyncio
import signal
from collections.abc import Awaitable, Callable

import structlog
from rich.text import Text

from ..config.context import AppContext
from ..core.errors import FtiError, InputError
from ..core.types import WhaleTrades
from ..data.client import ApiClient, decode
from ..output.formatters import (
    format_dim,
    format_price,
    format_quantity,
    format_side,
    format_symbol,
    format_volume,
    short_time,
)
from ..output.tables import make_table, print_dim, print_heading, print_table
from ..runner.watch import WatchLoop
from .common import build_query, emit_json

logger = structlog.get_logger(__name__)

WHALES_PATH = "/api/whales/combined"
STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def whale_params(symbol: str, hours: int, limit: int, min_value: float) -> dict[str, str]:
    return build_query(
        {
            "limit": str(limit),
            "min_value": f"{min_value:.0f}",
            "hours": str(hours),
            "symbol": symbol.upper(),
        }
    )


async def combined_whales(
    ctx: AppContext,
    client: ApiClient,
    symbol: str = "",
    hours: int = 24,
    limit: int = 50,
    min_value: float = 50_000.0,
) -> WhaleTrades | None:
    """Fetch and render one page of combined whale trades.

    Returns:
        Decoded trades, or None in JSON mode
    """
    symbol = symbol.upper()
    raw = await client.get_raw(
        WHALES_PATH, whale_params(symbol, hours, limit, min_value)
    )

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    resp: WhaleTrades = decode(raw, WhaleTrades)
    console = ctx.console

    console.print()
    heading = Text.assemble(
        (f"Whale trades — {symbol or 'all tokens'}  (min ", "bold"),
        format_volume(min_value),
        (f", last {hours}h)", "bold"),
    )
    console.print(heading, highlight=False)
    console.print()

    if resp.count == 0:
        print_dim(console, "No whale trades found.")
        return resp

    table = make_table(
        "TIME", "VENUE", "TOKEN", "EXCHANGE", "SIDE", "PRICE", "QTY", "VALUE"
    )
    for tr in resp.transactions:
        side = format_side(tr.side)
        if tr.is_aggressive:
            side = Text.assemble(side, (" *", "yellow"))
        table.add_row(
            format_dim(short_time(tr.time)),
            Text(tr.venue.upper()),
            format_symbol(tr.symbol),
            Text(tr.exchange),
            side,
            format_price(tr.price),
            format_quantity(tr.quantity),
            format_volume(tr.value_usd),
        )
    print_table(console, table)
    console.print(
        f"\n{resp.count} trades  CEX:{resp.cex_count}  DEX:{resp.dex_count}"
        "  (*)=aggressive",
        highlight=False,
    )
    return resp


async def whales(
    ctx: AppContext,
    symbol: str = "",
    all_tokens: bool = False,
    hours: int = 24,
    limit: int = 50,
    min_value: float = 50_000.0,
    watch: bool = False,
    interval: int = 30,
    stop_event: asyncio.Event | None = None,
    tick: Callable[[], Awaitable[None]] | None = None,
) -> WhaleTrades | None:
    """Show whale trades once, or keep refreshing in watch mode.

    Args:
        ctx: Invocation context
        symbol: Token symbol filter, ignored with all_tokens
        all_tokens: Show trades for every token
        hours: Look-back window in hours
        limit: Max trades to show
        min_value: Minimum trade value in USD
        watch: Poll and refresh until interrupted
        interval: Refresh interval in seconds
        stop_event: Stop trigger for watch mode; SIGINT/SIGTERM set it
        tick: Timer replacement for watch mode

    Returns:
        Decoded trades for a single fetch; None in watch or JSON mode

    Raises:
        InputError: If watch mode is requested with a non-positive interval
    """
    if watch and interval <= 0:
        raise InputError(
            f"interval must be a positive number of seconds, got {interval}"
        )
    if all_tokens:
        symbol = ""

    async with ctx.client() as client:
        if not watch:
            return await combined_whales(ctx, client, symbol, hours, limit, min_value)
        await watch_whales(
            ctx, client, symbol, hours, limit, min_value, interval, stop_event, tick
        )
    return None


async def watch_whales(
    ctx: AppContext,
    client: ApiClient,
    symbol: str,
    hours: int,
    limit: int,
    min_value: float,
    interval: int,
    stop_event: asyncio.Event | None = None,
    tick: Callable[[], Awaitable[None]] | None = None,
) -> WatchLoop:
    console = ctx.console

    async def render() -> None:
        console.clear()
        try:
            await combined_whales(ctx, client, symbol, hours, limit, min_value)
        finally:
            print_dim(console, f"\n  Refreshing every {interval}s — Ctrl+C to stop")

    def report(err: FtiError) -> None:
        ctx.err_console.print(Text.assemble(("error", "red"), f": {err}"))

    loop = WatchLoop(
        render, interval, stop_event=stop_event, tick=tick, on_error=report
    )

    event_loop = asyncio.get_running_loop()
    previous = {}
    for sig in STOP_SIGNALS:
        previous[sig] = signal.getsignal(sig)
        signal.signal(
            sig, lambda signum, frame: event_loop.call_soon_threadsafe(loop.stop)
        )

    try:
        await loop.run()
    finally:
        for sig, handler in previous.items():
            if handler is not None:
                signal.signal(sig, handler)
        console.print()

    logger.info("Whale watch finished", renders=loop.renders, failures=loop.failures)
    return loop
