"""Pure value formatters producing styled rich Text.

Zero is the "no data" sentinel for prices, volumes and PnL and renders as a
dim dash.
"""

from rich.text import Text

DASH = "—"

GREEN = "green"
RED = "red"
YELLOW = "yellow"
CYAN = "cyan"
DIM = "dim"


def dash() -> Text:
    return Text(DASH, style=DIM)


def format_price(p: float) -> Text:
    """Format a USD price with precision scaled to magnitude."""
    if p == 0:
        return dash()
    if p < 0.01:
        return Text(f"${p:.6f}")
    if p < 1:
        return Text(f"${p:.4f}")
    return Text(f"${p:.3f}")


def format_volume(v: float) -> Text:
    """Format a large USD amount with a K/M suffix."""
    if v == 0:
        return dash()
    if v >= 1_000_000:
        return Text(f"${v / 1_000_000:.1f}M")
    if v >= 1_000:
        return Text(f"${v / 1_000:.1f}K")
    return Text(f"${v:.0f}")


def format_quantity(q: float) -> Text:
    """Format a token quantity with a K/M suffix."""
    if q >= 1_000_000:
        return Text(f"{q / 1_000_000:.1f}M")
    if q >= 1_000:
        return Text(f"{q / 1_000:.1f}K")
    return Text(f"{q:.0f}")


def format_change(pct: float) -> Text:
    """Format a percentage change, green up and red down."""
    label = f"{pct:+.2f}%"
    if pct > 0:
        return Text(label, style=GREEN)
    if pct < 0:
        return Text(label, style=RED)
    return Text(label)


def format_pnl(pct: float) -> Text:
    if pct == 0:
        return dash()
    return Text(f"{pct:+.1f}%", style=GREEN if pct > 0 else RED)


def format_confidence(c: float) -> Text:
    """Format a 0-1 confidence score as a coloured percentage."""
    label = f"{c * 100:.0f}%"
    if c >= 0.85:
        return Text(label, style=GREEN)
    if c >= 0.70:
        return Text(label, style=YELLOW)
    return Text(label, style=RED)


def format_direction(direction: str) -> Text:
    value = direction.lower()
    if value == "short":
        return Text("short", style=RED)
    if value == "long":
        return Text("long", style=GREEN)
    return Text(direction)


def format_side(side: str) -> Text:
    value = side.lower()
    if value == "sell":
        return Text("sell", style=RED)
    if value == "buy":
        return Text("buy", style=GREEN)
    return Text(side)


def format_outcome(outcome: str) -> Text:
    """Colour a signal outcome status."""
    if outcome == "target_hit":
        return Text(outcome, style=GREEN)
    if outcome == "stopped_out":
        return Text(outcome, style=RED)
    return Text(outcome, style=DIM)


def format_grade(grade: str, score: float) -> Text:
    """Format a health grade with its score, e.g. ``A (87)``."""
    label = f"{grade} ({score:.0f})"
    styles = {"A": GREEN, "B": CYAN, "C": YELLOW}
    return Text(label, style=styles.get(grade, RED))


def format_tier(tier: str) -> Text:
    if tier == "high":
        return Text(tier, style=GREEN)
    if tier == "medium":
        return Text(tier, style=YELLOW)
    return Text(tier, style=DIM)


def format_holder_delta(delta: int) -> Text:
    if delta > 0:
        return Text(f"+{delta}", style=GREEN)
    if delta < 0:
        return Text(str(delta), style=RED)
    return Text("0", style=DIM)


def format_symbol(symbol: str) -> Text:
    return Text(symbol, style=CYAN)


def importance_bar(score: float) -> Text:
    """Bucket a match importance score into a three-dot indicator."""
    if score >= 80:
        return Text(f"{score:.0f} ●●●", style=GREEN)
    if score >= 50:
        return Text(f"{score:.0f} ●●○", style=YELLOW)
    return Text(f"{score:.0f} ●○○", style=DIM)


def token_pair(home: str, away: str) -> Text:
    """Join home/away token symbols, or a dash when neither is listed."""
    symbols = [s for s in (home, away) if s]
    if not symbols:
        return dash()
    return Text(" / ").join(format_symbol(s) for s in symbols)


def truncate(value: str, max_len: int) -> str:
    """Truncate to max_len characters, ending in an ellipsis when cut."""
    if len(value) <= max_len:
        return value
    return value[: max_len - 1] + "…"


def short_time(ts: str) -> str:
    # Display only: keeps "YYYY-MM-DDTHH:MM" without parsing.
    return ts[:16]


def format_dim(value: str) -> Text:
    return Text(value, style=DIM)
