"""Tests for cli.py — global flags, argparse wiring, error rendering, exit codes."""

import json
from unittest.mock import patch

import pytest

from trello_cli import config
from trello_cli.cli import _emit_cli_error, _extract_global_flags, build_parser, main
from trello_cli.exceptions import CliError, CredentialError, ValidationError

# ---------------------------------------------------------------------------
# _extract_global_flags
# ---------------------------------------------------------------------------


class TestExtractGlobalFlags:
    def test_no_flags(self):
        fmt, quiet, verbose, remaining = _extract_global_flags(["boards"])
        assert fmt == "table"
        assert quiet is False
        assert verbose is False
        assert remaining == ["boards"]

    def test_format_after_command(self):
        fmt, _quiet, _verbose, remaining = _extract_global_flags(
            ["card", "find", "bug", "--format", "tsv"]
        )
        assert fmt == "tsv"
        assert remaining == ["card", "find", "bug"]

    def test_json_alias(self):
        fmt, _quiet, _verbose, remaining = _extract_global_flags(["card", "show", "c1", "--json"])
        assert fmt == "json"
        assert remaining == ["card", "show", "c1"]

    def test_invalid_format(self):
        with pytest.raises(CliError, match="Invalid format 'csv'"):
            _extract_global_flags(["boards", "--format", "csv"])

    def test_quiet_and_verbose_exclusive(self):
        with pytest.raises(CliError, match="mutually exclusive"):
            _extract_global_flags(["-q", "-v", "boards"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _extract_global_flags(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("trello-cli ")


# ---------------------------------------------------------------------------
# build_parser
# ---------------------------------------------------------------------------


class TestParser:
    def test_card_update_collects_repeated_labels(self):
        ns = build_parser().parse_args(
            ["card", "update", "c1", "--label", "A", "--label", "B", "--clear-label", "C"]
        )
        assert ns.label == ["A", "B"]
        assert ns.clear_label == ["C"]
        assert ns.desc is None
        assert ns.archive is False

    def test_card_find_flags(self):
        ns = build_parser().parse_args(["card", "find", "^Bug", "-b", "Eng", "-l", "todo"])
        assert (ns.pattern, ns.board, ns.list) == ("^Bug", "Eng", "todo")

    def test_card_create_position_choices(self):
        with pytest.raises(CliError):
            build_parser().parse_args(["card", "create", "To Do", "x", "--position", "2"])

    def test_list_move(self):
        ns = build_parser().parse_args(["list", "move", "l1", "bottom"])
        assert (ns.list_id, ns.position) == ("l1", "bottom")

    def test_unknown_command_raises_cli_error(self):
        with pytest.raises(CliError):
            build_parser().parse_args(["frobnicate"])


# ---------------------------------------------------------------------------
# _emit_cli_error / main
# ---------------------------------------------------------------------------


class TestEmitCliError:
    def test_json_envelope(self, capsys):
        _emit_cli_error(CredentialError("[SETUP_NEEDED] nope"), "json")
        payload = json.loads(capsys.readouterr().err)
        assert payload["ok"] is False
        assert payload["schema_version"] == config.CONTRACT_SCHEMA_VERSION
        assert payload["error"] == {
            "type": "setup_needed",
            "message": "[SETUP_NEEDED] nope",
            "exit_code": 2,
        }

    def test_plain(self, capsys):
        _emit_cli_error(ValidationError("[ERROR] bad"), "table")
        assert capsys.readouterr().err == "[ERROR] bad\n"


class TestMain:
    def test_no_args_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "Usage: trello" in capsys.readouterr().out

    def test_missing_action(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["card"])
        assert exc_info.value.code == 1
        assert "Missing card action" in capsys.readouterr().err

    def test_credential_error_exits_2(self, capsys):
        with patch("trello_cli.commands._get_client") as mock_get_client:
            mock_get_client.side_effect = CredentialError("[SETUP_NEEDED] no creds")
            with pytest.raises(SystemExit) as exc_info:
                main(["boards"])
        assert exc_info.value.code == 2
        assert "[SETUP_NEEDED]" in capsys.readouterr().err

    def test_bad_position_fails_before_client(self, capsys):
        with patch("trello_cli.commands._get_client") as mock_get_client:
            with pytest.raises(SystemExit) as exc_info:
                main(["card", "move", "c1", "middle"])
        assert exc_info.value.code == 1
        mock_get_client.assert_not_called()
        assert "Invalid position" in capsys.readouterr().err

    def test_verbose_enables_http_log(self, monkeypatch):
        with patch("trello_cli.commands._get_client") as mock_get_client:
            mock_get_client.return_value.list_boards.return_value = {"boards": []}
            main(["boards", "-v"])
        assert config.HTTP_LOG_ENABLED is True
        assert config.RUNTIME_VERBOSE is True
