"""Read tools: boards, search, card detail (3 tools)."""

from __future__ import annotations

from trello_cli import CliError
from trello_cli.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _validate_id,
)


def list_boards(board: str | None = None) -> dict:
    """List the member's open boards.

    Args:
        board: Optional board ID or case-insensitive name substring.

    Returns:
        Dict with boards (id, name) and a notice when nothing matched.
    """
    return _finalize_tool_result(_call("list_boards", board=board))


def find_cards(pattern: str = "", board: str | None = None, list_name: str | None = None) -> dict:
    """Search card names with a case-insensitive regex across boards.

    Args:
        pattern: Regex; empty string returns every card in scope.
        board: Board ID or name substring.
        list_name: List name substring.

    Returns:
        Dict with cards (id, board, list, title), count, and a notice when empty.
    """
    return _finalize_tool_result(
        _call("find_cards", pattern=pattern, board=board, list_name=list_name)
    )


def show_card(card_id: str, include_comments: bool = False) -> dict:
    """Card detail: name, board, list, labels, description, archived.

    Args:
        card_id: 24-char hex card ID.
        include_comments: Also return every comment, oldest first.
    """
    try:
        _validate_id(card_id)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "validation"))
    return _finalize_tool_result(
        _call("show_card", card_id=card_id, include_comments=include_comments)
    )


def register(mcp):
    mcp.tool()(list_boards)
    mcp.tool()(find_cards)
    mcp.tool()(show_card)
