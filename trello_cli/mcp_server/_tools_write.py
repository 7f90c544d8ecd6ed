"""Write tools: card updates, reordering, creation (4 tools)."""

from __future__ import annotations

from typing import Literal

from trello_cli import CliError
from trello_cli.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _validate_id,
)


def _invalid(e: CliError) -> dict:
    return _finalize_tool_result(_contract_error(str(e), "validation"))


def update_card(
    card_id: str,
    description: str | None = None,
    add_labels: list[str] | None = None,
    clear_labels: list[str] | None = None,
    comment: str | None = None,
    archive: bool = False,
) -> dict:
    """Apply several changes to one card in a fixed order:
    description, add_labels, clear_labels, comment, archive.

    Stops at the first failing step; earlier steps stay applied and the
    error names the failed step.

    Args:
        card_id: 24-char hex card ID.
        description: New description ("" clears it).
        add_labels/clear_labels: Board label names (exact, case-sensitive).
        comment: Comment text; blank text is skipped.
        archive: True to archive the card last.
    """
    try:
        _validate_id(card_id)
    except CliError as e:
        return _invalid(e)
    return _finalize_tool_result(
        _call(
            "update_card",
            card_id=card_id,
            description=description,
            add_labels=add_labels,
            clear_labels=clear_labels,
            comment=comment,
            archive=archive,
        )
    )


def move_card(card_id: str, position: str) -> dict:
    """Reorder a card within its list.

    Args:
        card_id: 24-char hex card ID.
        position: "top", "bottom", or a 1-based position such as "2".
    """
    try:
        _validate_id(card_id)
    except CliError as e:
        return _invalid(e)
    return _finalize_tool_result(_call("move_card", card_id=card_id, position=position))


def move_list(list_id: str, position: str) -> dict:
    """Reorder a list within its board. Same position rules as move_card."""
    try:
        _validate_id(list_id, "list_id")
    except CliError as e:
        return _invalid(e)
    return _finalize_tool_result(_call("move_list", list_id=list_id, position=position))


def create_card(
    list_filter: str,
    name: str,
    board: str | None = None,
    description: str | None = None,
    position: Literal["top", "bottom"] | None = None,
) -> dict:
    """Create a card.

    Args:
        list_filter: List ID, or a name substring matching exactly one list.
        name: Card title.
        board: Board ID or name substring narrowing the list match.
        description: Card description.
        position: "top" or "bottom".

    Returns:
        Dict with ok, id, name, list and url of the created card.
    """
    return _finalize_tool_result(
        _call(
            "create_card",
            list_filter=list_filter,
            name=name,
            board=board,
            description=description,
            position=position,
        )
    )


def register(mcp):
    mcp.tool()(update_card)
    mcp.tool()(move_card)
    mcp.tool()(move_list)
    mcp.tool()(create_card)
