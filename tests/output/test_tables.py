"""Tests for table and JSON output helpers."""

import io

from rich.console import Console
from rich.text import Text

from fti.output.tables import make_table, print_field, print_json


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


def test_print_json_two_space_indent():
    """Test pretty-printing with two-space indentation."""
    console = _console()

    print_json(console, b'{"symbol":"PSG","prices":[1,2]}')

    assert console.file.getvalue() == (
        '{\n  "symbol": "PSG",\n  "prices": [\n    1,\n    2\n  ]\n}\n'
    )


def test_print_json_keeps_markup_like_text():
    """Test that bracketed values are not treated as markup."""
    console = _console()

    print_json(console, b'{"name": "[bold]x[/bold]"}')

    assert '"name": "[bold]x[/bold]"' in console.file.getvalue()


def test_print_json_non_json_verbatim():
    """Test that a non-JSON body is passed through unchanged."""
    console = _console()

    print_json(console, b"plain text body")

    assert console.file.getvalue() == "plain text body"


def test_make_table_headers_and_rows():
    """Test that headers and cells are rendered aligned."""
    console = _console()
    table = make_table("SYMBOL", "PRICE")
    table.add_row(Text("PSG"), Text("$2.500"))
    table.add_row(Text("JUV"), Text("$1.100"))

    console.print(table)

    lines = console.file.getvalue().splitlines()
    header = next(line for line in lines if "SYMBOL" in line)
    row = next(line for line in lines if "PSG" in line)
    assert header.index("PRICE") == row.index("$2.500")


def test_print_field():
    console = _console()

    print_field(console, "Price", Text("$2.500"))

    assert console.file.getvalue() == "  Price:       $2.500\n"


def test_print_json_non_json_bytes_unchanged():
    """Test that invalid UTF-8 reaches a binary-backed stream untouched."""
    stream = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    console = Console(file=stream, width=120, color_system=None)

    print_json(console, b"\xff\xfe<html>\x80")

    assert stream.buffer.getvalue() == b"\xff\xfe<html>\x80"
