"""
Command implementations for trello-cli.
Each cmd_*() function receives an argparse.Namespace and handles one CLI command.

Business logic lives in client.py (TrelloClient). These thin wrappers
handle argparse → keyword args, format selection, and formatter dispatch.
"""

from trello_cli.client import TrelloClient
from trello_cli.formatters import (
    format_boards_table,
    format_card_detail,
    format_cards_table,
    format_cards_tsv,
    format_update_summary,
    mutation_response,
    notice,
    output,
)
from trello_cli.models import CardUpdate, PositionRequest


def _get_client():
    """Build the client, resolving credentials once for this invocation."""
    return TrelloClient()


def _warn_skipped(result):
    for step in result.get("skipped", []):
        notice(f"[WARN] Skipped {step}: nothing to send.")


# ---------------------------------------------------------------------------
# Read commands
# ---------------------------------------------------------------------------


def cmd_boards(ns):
    result = _get_client().list_boards(board=ns.board)
    notice(result.get("notice"))
    if result["boards"] or ns.format == "json":
        output(result, format_boards_table, ns.format)


def cmd_card_find(ns):
    result = _get_client().find_cards(ns.pattern, board=ns.board, list_name=ns.list)
    notice(result.get("notice"))
    if result["cards"] or ns.format == "json":
        output(result, format_cards_table, ns.format, tsv_formatter=format_cards_tsv)


def cmd_card_show(ns):
    detail = _get_client().show_card(ns.card_id, include_comments=ns.comments)
    output(detail, format_card_detail, ns.format)


# ---------------------------------------------------------------------------
# Card mutations
# ---------------------------------------------------------------------------


def cmd_card_update(ns):
    ops = CardUpdate.from_namespace(ns)
    result = _get_client().apply_update(ns.card_id, ops)
    _warn_skipped(result)
    output(result, format_update_summary, ns.format)


def cmd_card_label(ns):
    result = _get_client().label_card(ns.card_id, ns.label, clear=ns.clear)
    output(result, format_update_summary, ns.format)


def cmd_card_comment(ns):
    result = _get_client().comment_card(ns.card_id, ns.text)
    mutation_response(f"Commented on card {ns.card_id}", result, ns.format)


def cmd_card_archive(ns):
    result = _get_client().archive_card(ns.card_id)
    name = next((s.get("name") for s in result["steps"] if s.get("name")), ns.card_id)
    mutation_response(f"Archived card '{name}'", result, ns.format)


def cmd_card_restore(ns):
    result = _get_client().restore_card(ns.card_id)
    if result["changed"]:
        mutation_response(f"Restored card '{result['name']}'", result, ns.format)
    else:
        mutation_response(f"Card '{result['name']}' is not archived", result, ns.format)


def cmd_card_create(ns):
    result = _get_client().create_card(
        ns.list,
        ns.name,
        board=ns.board,
        description=ns.desc,
        position=ns.position,
    )
    summary = f"Created card '{result['name']}' in list '{result['list']}' ({result['id']})"
    if result.get("url"):
        summary += f"\n{result['url']}"
    mutation_response(summary, result, ns.format)


# ---------------------------------------------------------------------------
# Reordering
# ---------------------------------------------------------------------------


def cmd_card_move(ns):
    request = PositionRequest.parse(ns.position)
    result = _get_client().move_card(ns.card_id, request)
    mutation_response(f"Moved card '{result['name']}' to position {ns.position}", result, ns.format)


def cmd_list_move(ns):
    request = PositionRequest.parse(ns.position)
    result = _get_client().move_list(ns.list_id, request)
    mutation_response(f"Moved list '{result['name']}' to position {ns.position}", result, ns.format)
