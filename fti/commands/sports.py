"""Upcoming sports fixtures for fan token teams."""

from rich.text import Text

from ..config.context import AppContext
from ..core.types import UpcomingMatches
from ..data.client import decode
from ..output.formatters import importance_bar, short_time, token_pair, truncate
from ..output.tables import make_table, print_dim, print_heading, print_table
from .common import build_query, emit_json

UPCOMING_PATH = "/api/matches/upcoming"
MATCH_LIMIT = 100


async def upcoming_matches(
    ctx: AppContext, token: str = "", days: int = 14
) -> UpcomingMatches | None:
    """List upcoming matches with token context.

    Args:
        ctx: Invocation context
        token: Optional token symbol filter
        days: Look-ahead window in days

    Returns:
        Decoded matches, or None in JSON mode
    """
    token = token.upper()
    params = build_query(
        {"days": str(days), "limit": str(MATCH_LIMIT), "token": token}
    )

    async with ctx.client() as client:
        raw = await client.get_raw(UPCOMING_PATH, params)

    if ctx.json_output:
        emit_json(ctx, raw)
        return None

    resp: UpcomingMatches = decode(raw, UpcomingMatches)
    console = ctx.console

    console.print()
    print_heading(
        console, f"Upcoming matches — {token or 'all tokens'}  (next {days} days)"
    )
    console.print()

    if resp.count == 0:
        print_dim(console, "No upcoming matches found.")
        return resp

    table = make_table("DATE", "HOME", "AWAY", "COMPETITION", "TOKENS", "IMP")
    for m in resp.matches:
        table.add_row(
            Text(short_time(m.match_date)),
            Text(truncate(m.home_team, 18)),
            Text(truncate(m.away_team, 18)),
            Text(truncate(m.competition, 18)),
            token_pair(m.home_token, m.away_token),
            importance_bar(m.importance_score),
        )
    print_table(console, table)
    console.print(f"\n{resp.count} match(es)", highlight=False)
    return resp
