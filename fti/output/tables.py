"""Table and JSON output helpers."""

import json

from rich import box
from rich.console import Console
from rich.measure import Measurement
from rich.segment import Segments
from rich.table import Table
from rich.text import Text

UNBOUNDED_WIDTH = 10_000


def make_table(*headers: str) -> Table:
    """Create a borderless aligned table with a bold header row."""
    table = Table(
        box=box.SIMPLE_HEAD,
        show_edge=False,
        pad_edge=False,
        header_style="bold",
        border_style="dim",
    )
    for header in headers:
        table.add_column(header, no_wrap=True)
    return table


def print_table(console: Console, table: Table) -> None:
    """Print a table at its natural width.

    Cells are never shrunk or ellipsised to fit the console, so formatted
    values survive narrow terminals and piped output.
    """
    natural = Measurement.get(
        console, console.options.update_width(UNBOUNDED_WIDTH), table
    ).maximum
    options = console.options.update_width(max(natural, 1))
    console.print(Segments(console.render(table, options)), crop=False)


def print_json(console: Console, raw: bytes) -> None:
    """Pretty-print a JSON body with two-space indentation.

    Bodies that are not valid JSON are written verbatim: as bytes when the
    console writes to a binary-backed stream, decoded otherwise.
    """
    try:
        value = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        write_raw(console, raw)
        return
    console.out(
        json.dumps(value, indent=2, ensure_ascii=False), highlight=False
    )


def write_raw(console: Console, raw: bytes) -> None:
    out = console.file
    out.flush()
    buffer = getattr(out, "buffer", None)
    if buffer is not None:
        buffer.write(raw)
        buffer.flush()
    else:
        out.write(raw.decode("utf-8", errors="replace"))
        out.flush()


def print_field(console: Console, label: str, value: Text | str, width: int = 12) -> None:
    """Print an indented ``Label:   value`` line."""
    line = Text(f"  {label + ':':<{width}} ")
    line.append(value if isinstance(value, Text) else Text(value))
    console.print(line, highlight=False)


def print_heading(console: Console, text: str) -> None:
    console.print(Text(text, style="bold"), highlight=False)


def print_dim(console: Console, text: str) -> None:
    console.print(Text(text, style="dim"), highlight=False)
