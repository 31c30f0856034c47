"""fti - command-line interface for Fan Token Intel.

Market data, whale tracking and trading signals for sports fan tokens.
"""

import argparse
import asyncio
import dataclasses
import inspect
import sys

import structlog
from rich.text import Text

from . import __version__
from .commands import auth, prices, signals, sports, tokens, whales
from .config.context import AppContext
from .core.errors import FtiError
from .core.log import configure_logging

logger = structlog.get_logger(__name__)

EPILOG = """
Get an API key:
  fti auth register

Quick start:
  fti tokens list
  fti signals active --token PSG
  fti whales --all
"""


def _cmd_tokens_list(ctx: AppContext, args: argparse.Namespace):
    return tokens.list_tokens(ctx, sort_by=args.sort_by, order=args.order)


def _cmd_tokens_get(ctx: AppContext, args: argparse.Namespace):
    return tokens.get_token(ctx, args.symbol)


def _cmd_prices(ctx: AppContext, args: argparse.Namespace):
    if not args.history:
        return prices.current_price(ctx, args.symbol)
    return prices.price_history(
        ctx, args.symbol, days=args.days, interval=args.interval, limit=args.limit
    )


def _cmd_signals_active(ctx: AppContext, args: argparse.Namespace):
    return signals.active_signals(
        ctx, token=args.token, min_confidence=args.min_confidence
    )


def _cmd_signals_history(ctx: AppContext, args: argparse.Namespace):
    return signals.signal_history(
        ctx, token=args.token, days=args.days, outcome=args.outcome, limit=args.limit
    )


def _cmd_sports_upcoming(ctx: AppContext, args: argparse.Namespace):
    return sports.upcoming_matches(ctx, token=args.token, days=args.days)


def _cmd_whales(ctx: AppContext, args: argparse.Namespace):
    return whales.whales(
        ctx,
        symbol=args.symbol or "",
        all_tokens=args.all,
        hours=args.hours,
        limit=args.limit,
        min_value=args.min_value,
        watch=args.watch,
        interval=args.interval,
    )


def _cmd_auth_register(ctx: AppContext, args: argparse.Namespace):
    return auth.register(
        ctx,
        name=args.name,
        email=args.email,
        description=args.description,
        scope=args.scope,
    )


def _cmd_auth_login(ctx: AppContext, args: argparse.Namespace):
    return auth.login(ctx, key=args.key)


def _cmd_auth_me(ctx: AppContext, args: argparse.Namespace):
    return auth.me(ctx)


def build_parser() -> argparse.ArgumentParser:
    """Build the fti argument parser."""
    parser = argparse.ArgumentParser(
        prog="fti",
        description="Fan Token Intel CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("--version", action="version", version=f"fti {__version__}")
    parser.add_argument(
        "--api-key",
        default="",
        help="API key (overrides FTI_API_KEY env and ~/.fti/config.toml)",
    )
    parser.add_argument("--json", action="store_true", help="Output raw JSON")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # tokens
    tokens_parser = subparsers.add_parser("tokens", help="Fan token market data")
    tokens_sub = tokens_parser.add_subparsers(dest="subcommand", metavar="<subcommand>")

    list_parser = tokens_sub.add_parser(
        "list", help="List all fan tokens with market metrics"
    )
    list_parser.add_argument(
        "--sort-by",
        default="volume_24h",
        help="Sort field (volume_24h, price_change_24h, market_cap, health_score)",
    )
    list_parser.add_argument("--order", default="desc", help="Sort order (asc, desc)")
    list_parser.set_defaults(func=_cmd_tokens_list)

    get_parser = tokens_sub.add_parser(
        "get", help="Get detailed info for a specific token"
    )
    get_parser.add_argument("symbol", metavar="SYMBOL")
    get_parser.set_defaults(func=_cmd_tokens_get)

    # prices
    prices_parser = subparsers.add_parser(
        "prices", help="Current price or historical price data"
    )
    prices_parser.add_argument("symbol", metavar="SYMBOL")
    prices_parser.add_argument(
        "--history", action="store_true", help="Show historical price data"
    )
    prices_parser.add_argument(
        "--days", type=int, default=7, help="Number of days of history"
    )
    prices_parser.add_argument(
        "--interval", default="1h", help="Candle interval (1h, 4h, 1d)"
    )
    prices_parser.add_argument(
        "--limit", type=int, default=0, help="Max rows to display (0 = all)"
    )
    prices_parser.set_defaults(func=_cmd_prices)

    # signals
    signals_parser = subparsers.add_parser(
        "signals", help="Trading signals (active and historical)"
    )
    signals_sub = signals_parser.add_subparsers(
        dest="subcommand", metavar="<subcommand>"
    )

    active_parser = signals_sub.add_parser(
        "active", help="Show currently active trading signals"
    )
    active_parser.add_argument("--token", default="", help="Filter by token symbol")
    active_parser.add_argument(
        "--min-confidence",
        type=float,
        default=0.65,
        help="Minimum confidence (0-1)",
    )
    active_parser.set_defaults(func=_cmd_signals_active)

    history_parser = signals_sub.add_parser(
        "history", help="Show historical signal performance"
    )
    history_parser.add_argument("--token", default="", help="Filter by token symbol")
    history_parser.add_argument(
        "--days", type=int, default=30, help="Look-back period in days"
    )
    history_parser.add_argument(
        "--outcome",
        default="",
        help="Filter by outcome (target_hit, stopped_out, expired)",
    )
    history_parser.add_argument("--limit", type=int, default=50, help="Max results")
    history_parser.set_defaults(func=_cmd_signals_history)

    # sports
    sports_parser = subparsers.add_parser(
        "sports", help="Upcoming sports matches for fan token teams"
    )
    sports_sub = sports_parser.add_subparsers(dest="subcommand", metavar="<subcommand>")
    upcoming_parser = sports_sub.add_parser(
        "upcoming", help="List upcoming matches with token context"
    )
    upcoming_parser.add_argument(
        "--token", default="", help="Filter by token symbol (e.g. PSG)"
    )
    upcoming_parser.add_argument(
        "--days", type=int, default=14, help="Look-ahead window in days"
    )
    upcoming_parser.set_defaults(func=_cmd_sports_upcoming)

    # whales
    whales_parser = subparsers.add_parser(
        "whales", help="CEX + DEX whale trade activity"
    )
    whales_parser.add_argument("symbol", metavar="SYMBOL", nargs="?", default="")
    whales_parser.add_argument(
        "--all", action="store_true", help="Show whales for all tokens"
    )
    whales_parser.add_argument(
        "--hours", type=int, default=24, help="Look-back window in hours"
    )
    whales_parser.add_argument(
        "--limit", type=int, default=50, help="Max trades to show"
    )
    whales_parser.add_argument(
        "--min-value",
        type=float,
        default=50_000.0,
        help="Minimum trade value in USD",
    )
    whales_parser.add_argument(
        "--watch", action="store_true", help="Poll and refresh continuously"
    )
    whales_parser.add_argument(
        "--interval",
        type=int,
        default=30,
        help="Refresh interval in seconds (with --watch)",
    )
    whales_parser.set_defaults(func=_cmd_whales)

    # auth
    auth_parser = subparsers.add_parser("auth", help="Manage API keys and account")
    auth_sub = auth_parser.add_subparsers(dest="subcommand", metavar="<subcommand>")

    register_parser = auth_sub.add_parser(
        "register", help="Register a new API key interactively"
    )
    register_parser.add_argument("--name", default=None, help="Name")
    register_parser.add_argument("--email", default=None, help="Email")
    register_parser.add_argument(
        "--description", default=None, help="Description (optional)"
    )
    register_parser.add_argument(
        "--scope", default=None, choices=["read", "full"], help="Key scope"
    )
    register_parser.set_defaults(func=_cmd_auth_register)

    login_parser = auth_sub.add_parser(
        "login", help="Save an API key to ~/.fti/config.toml"
    )
    login_parser.add_argument(
        "--key", default=None, help="API key to save (prompted when omitted)"
    )
    login_parser.set_defaults(func=_cmd_auth_login)

    me_parser = auth_sub.add_parser("me", help="Show current API key info")
    me_parser.set_defaults(func=_cmd_auth_me)

    return parser


async def _dispatch(ctx: AppContext, args: argparse.Namespace) -> None:
    result = args.func(ctx, args)
    if inspect.isawaitable(result):
        await result


def main(argv: list[str] | None = None, ctx: AppContext | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments without the program name, defaults to sys.argv[1:]
        ctx: Prebuilt context; global flags are applied on top of it

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    base = ctx or AppContext()
    ctx = dataclasses.replace(
        base,
        api_key_override=args.api_key or base.api_key_override,
        json_output=args.json or base.json_output,
    )

    try:
        asyncio.run(_dispatch(ctx, args))
    except FtiError as e:
        logger.debug("Command failed", error_type=type(e).__name__, error=str(e))
        ctx.err_console.print(Text.assemble(("error", "red"), f": {e}"))
        return e.exit_code
    except KeyboardInterrupt:
        ctx.err_console.print()
        return 130
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
