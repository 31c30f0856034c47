"""Tests for argument parsing and exit codes."""

import json

import httpx
import pytest
import respx

from fti.cli import build_parser, main
from fti.config.settings import load_settings

BASE = "https://api.fti.test"


class TestParser:
    """Test flag defaults."""

    def test_whales_defaults(self):
        args = build_parser().parse_args(["whales"])

        assert args.symbol == ""
        assert args.all is False
        assert args.hours == 24
        assert args.limit == 50
        assert args.min_value == 50_000.0
        assert args.watch is False
        assert args.interval == 30

    def test_signal_defaults(self):
        parser = build_parser()

        active = parser.parse_args(["signals", "active"])
        history = parser.parse_args(["signals", "history"])

        assert active.min_confidence == 0.65
        assert active.token == ""
        assert history.days == 30
        assert history.limit == 50
        assert history.outcome == ""

    def test_other_defaults(self):
        parser = build_parser()

        assert parser.parse_args(["tokens", "list"]).sort_by == "volume_24h"
        assert parser.parse_args(["tokens", "list"]).order == "desc"
        prices = parser.parse_args(["prices", "PSG"])
        assert (prices.history, prices.days, prices.interval, prices.limit) == (
            False,
            7,
            "1h",
            0,
        )
        assert parser.parse_args(["sports", "upcoming"]).days == 14

    def test_global_flags(self):
        args = build_parser().parse_args(["--json", "--api-key", "k", "tokens", "list"])

        assert args.json is True
        assert args.api_key == "k"

    def test_missing_symbol_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["tokens", "get"])

        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "fti 1.0.0" in capsys.readouterr().out


class TestMain:
    """Test dispatch and error mapping."""

    def test_no_command_prints_help(self, make_ctx, capsys):
        assert main([], ctx=make_ctx()) == 1
        assert "Fan Token Intel CLI" in capsys.readouterr().out

    def test_group_without_subcommand(self, make_ctx):
        assert main(["signals"], ctx=make_ctx()) == 1

    @respx.mock
    def test_success(self, make_ctx):
        respx.get(f"{BASE}/api/tokens").mock(
            return_value=httpx.Response(200, json=[{"symbol": "PSG", "price": 2.5}])
        )
        ctx = make_ctx()

        assert main(["tokens", "list"], ctx=ctx) == 0
        assert "1 tokens" in ctx.console.file.getvalue()
        assert ctx.err_console.file.getvalue() == ""

    @respx.mock
    def test_json_flag(self, make_ctx):
        respx.get(f"{BASE}/api/tokens/PSG").mock(
            return_value=httpx.Response(200, json={"token": {"symbol": "PSG"}})
        )
        ctx = make_ctx()

        assert main(["--json", "tokens", "get", "psg"], ctx=ctx) == 0
        assert json.loads(ctx.console.file.getvalue()) == {"token": {"symbol": "PSG"}}

    @respx.mock
    def test_api_key_flag_reaches_server(self, make_ctx):
        route = respx.get(f"{BASE}/api/v1/signals/active").mock(
            return_value=httpx.Response(200, json={"active_signals": 0})
        )

        assert main(["--api-key", "ti_live_flag", "signals", "active"], ctx=make_ctx()) == 0
        assert route.calls.last.request.headers["Authorization"] == "Bearer ti_live_flag"

    @respx.mock
    def test_auth_required(self, make_ctx):
        ctx = make_ctx()

        assert main(["signals", "active"], ctx=ctx) == 2
        assert len(respx.calls) == 0
        assert (
            ctx.err_console.file.getvalue()
            == "error: API key required - run: fti auth login\n"
        )

    @respx.mock
    def test_api_error(self, make_ctx):
        respx.get(f"{BASE}/api/tokens/XYZ").mock(
            return_value=httpx.Response(404, json={"detail": "token not found"})
        )
        ctx = make_ctx()

        assert main(["tokens", "get", "xyz"], ctx=ctx) == 2
        assert "error: API error 404: token not found" in ctx.err_console.file.getvalue()

    @respx.mock
    def test_network_error(self, make_ctx):
        respx.get(f"{BASE}/api/tokens").mock(side_effect=httpx.ConnectError("refused"))
        ctx = make_ctx()

        assert main(["tokens", "list"], ctx=ctx) == 3
        assert "error: request failed" in ctx.err_console.file.getvalue()

    @respx.mock
    def test_decode_error(self, make_ctx):
        respx.get(f"{BASE}/api/tokens").mock(
            return_value=httpx.Response(200, content=b"<html>")
        )

        assert main(["tokens", "list"], ctx=make_ctx()) == 4

    def test_config_error(self, make_ctx, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("api_key = ")
        ctx = make_ctx()

        assert main(["signals", "history"], ctx=ctx) == 5
        assert str(settings_path) in ctx.err_console.file.getvalue()

    def test_login_with_key(self, make_ctx, settings_path):
        ctx = make_ctx()

        assert main(["auth", "login", "--key", "ti_live_cli"], ctx=ctx) == 0
        assert load_settings(settings_path).api_key == "ti_live_cli"

    def test_login_empty_key(self, make_ctx):
        ctx = make_ctx(ask=lambda text: "")

        assert main(["auth", "login"], ctx=ctx) == 1
        assert "error: no API key provided" in ctx.err_console.file.getvalue()

    @respx.mock
    def test_global_flags_keep_base_context(self, make_ctx, settings_path):
        """Test that flags layer onto the given context without dropping fields."""
        route = respx.get("https://staging.fti.test/api/v1/auth/me").mock(
            return_value=httpx.Response(200, json={"name": "scout"})
        )
        ctx = make_ctx(base_url_override="https://staging.fti.test")

        assert main(["--json", "--api-key", "ti_live_flag", "auth", "me"], ctx=ctx) == 0
        assert route.calls.last.request.headers["Authorization"] == "Bearer ti_live_flag"
        assert json.loads(ctx.console.file.getvalue()) == {"name": "scout"}
        assert not settings_path.exists()
