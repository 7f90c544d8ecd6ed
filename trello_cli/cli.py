"""
trello-cli — CLI tool for inspecting and updating Trello boards, lists, and cards
"""

import argparse
import json
import sys

from trello_cli import config
from trello_cli.commands import (
    cmd_boards,
    cmd_card_archive,
    cmd_card_comment,
    cmd_card_create,
    cmd_card_find,
    cmd_card_label,
    cmd_card_move,
    cmd_card_restore,
    cmd_card_show,
    cmd_card_update,
    cmd_list_move,
)
from trello_cli.exceptions import CliError

HELP_TEXT = """\
Usage: trello <command> [args...]

Global flags:
  --format table          Output as readable text (default)
  --format tsv            Tab-separated output (card find only)
  --format json, --json   Output as JSON
  --quiet, -q             Suppress notices and warnings
  --verbose, -v           Enable HTTP request logging
  --version               Show version number

Credentials:
  TRELLO_API_KEY / TRELLO_API_TOKEN environment variables, or
  api_key / api_token in <config dir>/trello-cli/config.toml

Commands:
  boards                  - List your open boards
    -b, --board <filter>    Only boards whose name contains <filter> (or a board ID)
  card show <card_id>     - Show card details
    --comments              Include every comment, oldest first
  card find <pattern>     - Search card names (case-insensitive regex, "" for all)
    -b, --board <filter>    Board ID or name substring
    -l, --list <filter>     List name substring
  card create <list> <name>
                          - Create a card in a list (list ID or name substring)
    -b, --board <filter>    Narrow list matching to these boards
    --desc <text>           Card description
    --position top|bottom   Where to put the new card
  card update <card_id>   - Apply several changes in one go. Order is fixed:
                            description, labels, cleared labels, comment, archive
    --desc <text>           Replace the description ("" clears it)
    --label <name>          Apply a board label (repeatable)
    --clear-label <name>    Remove a board label (repeatable)
    --comment <text>        Post a comment
    --archive               Archive the card
  card label <card_id> <name>
                          - Apply a label by exact name
    --clear                 Remove it instead
  card comment <card_id> <text>
                          - Post a comment
  card archive <card_id>  - Archive a card
  card restore <card_id>  - Restore an archived card
  card move <card_id> <top|bottom|N>
                          - Reorder a card within its list (N is 1-based)
  list move <list_id> <top|bottom|N>
                          - Reorder a list within its board (N is 1-based)
  version                 - Show version number
"""


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so --format works after subcommand)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, quiet, verbose, remaining_argv).
    Handles --version directly.
    """
    fmt = "table"
    quiet = False
    verbose = False
    remaining = []
    i = 0
    while i < len(argv):
        if argv[i] == "--version":
            print(f"trello-cli {config.VERSION}")
            sys.exit(0)
        elif argv[i] == "--json":
            fmt = "json"
            i += 1
            continue
        elif argv[i] in ("--quiet", "-q"):
            quiet = True
            i += 1
            continue
        elif argv[i] in ("--verbose", "-v"):
            verbose = True
            i += 1
            continue
        elif argv[i] == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in config.VALID_FORMATS:
                raise CliError(
                    f"[ERROR] Invalid format '{fmt}'. Use: {', '.join(config.VALID_FORMATS)}"
                )
            i += 2
            continue
        else:
            remaining.append(argv[i])
        i += 1
    if quiet and verbose:
        raise CliError("[ERROR] --quiet and --verbose are mutually exclusive.")
    return fmt, quiet, verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def build_parser():
    parser = _SubcommandParser(
        prog="trello",
        description="CLI tool for inspecting and updating Trello boards, lists, and cards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    # --- boards ---
    p = sub.add_parser("boards")
    p.add_argument("--board", "-b")
    p.set_defaults(func=cmd_boards)

    # --- card <action> ---
    card = sub.add_parser("card")
    card_sub = card.add_subparsers(dest="action", parser_class=_SubcommandParser)

    p = card_sub.add_parser("show")
    p.add_argument("card_id")
    p.add_argument("--comments", action="store_true")
    p.set_defaults(func=cmd_card_show)

    p = card_sub.add_parser("find")
    p.add_argument("pattern")
    p.add_argument("--board", "-b")
    p.add_argument("--list", "-l")
    p.set_defaults(func=cmd_card_find)

    p = card_sub.add_parser("create")
    p.add_argument("list")
    p.add_argument("name")
    p.add_argument("--board", "-b")
    p.add_argument("--desc")
    p.add_argument("--position", choices=["top", "bottom"])
    p.set_defaults(func=cmd_card_create)

    p = card_sub.add_parser("update")
    p.add_argument("card_id")
    p.add_argument("--desc")
    p.add_argument("--label", action="append", default=[])
    p.add_argument("--clear-label", action="append", default=[], dest="clear_label")
    p.add_argument("--comment")
    p.add_argument("--archive", action="store_true")
    p.set_defaults(func=cmd_card_update)

    p = card_sub.add_parser("label")
    p.add_argument("card_id")
    p.add_argument("label")
    p.add_argument("--clear", action="store_true")
    p.set_defaults(func=cmd_card_label)

    p = card_sub.add_parser("comment")
    p.add_argument("card_id")
    p.add_argument("text")
    p.set_defaults(func=cmd_card_comment)

    p = card_sub.add_parser("archive")
    p.add_argument("card_id")
    p.set_defaults(func=cmd_card_archive)

    p = card_sub.add_parser("restore")
    p.add_argument("card_id")
    p.set_defaults(func=cmd_card_restore)

    p = card_sub.add_parser("move")
    p.add_argument("card_id")
    p.add_argument("position")
    p.set_defaults(func=cmd_card_move)

    # --- list <action> ---
    lst = sub.add_parser("list")
    list_sub = lst.add_subparsers(dest="action", parser_class=_SubcommandParser)

    p = list_sub.add_parser("move")
    p.add_argument("list_id")
    p.add_argument("position")
    p.set_defaults(func=cmd_list_move)

    # --- version (bare word) ---
    sub.add_parser("version").set_defaults(func=None)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


def _emit_cli_error(err, fmt):
    msg = str(err)
    if fmt == "json":
        payload = {
            "ok": False,
            "schema_version": config.CONTRACT_SCHEMA_VERSION,
            "error": {
                "type": getattr(err, "error_type", "error"),
                "message": msg,
                "exit_code": getattr(err, "exit_code", 1),
            },
        }
        print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
        return
    print(msg, file=sys.stderr)


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv:
        print(HELP_TEXT)
        sys.exit(0)

    fmt = "table"
    try:
        # Extract global flags from anywhere in argv
        fmt, quiet, verbose, remaining_argv = _extract_global_flags(argv)
        config.RUNTIME_QUIET = quiet
        config.RUNTIME_VERBOSE = verbose
        if verbose:
            config.HTTP_LOG_ENABLED = True

        if not remaining_argv:
            print(HELP_TEXT)
            sys.exit(0)

        parser = build_parser()
        ns = parser.parse_args(remaining_argv)
        ns.format = fmt  # inject global format flag

        if ns.show_help or not ns.command:
            print(HELP_TEXT)
            sys.exit(0)

        if ns.command == "version":
            print(f"trello-cli {config.VERSION}")
            sys.exit(0)

        handler = getattr(ns, "func", None)
        if handler is None:
            raise CliError(f"[ERROR] Missing {ns.command} action. Run 'trello --help'.")
        handler(ns)

    except CliError as e:
        _emit_cli_error(e, fmt)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
