"""
TrelloClient — public Python API for working with Trello boards and cards.

Single entry point for the CLI and the MCP server.
All methods return flat dicts suitable for JSON serialization.
"""

from __future__ import annotations

# TypedDict return types live in trello_cli.types for documentation.
# Method signatures use plain dict[str, Any] for mypy compatibility.
from typing import Any

from trello_cli.api import TrelloTransport
from trello_cli.comments import fetch_all_comments
from trello_cli.credentials import resolve_credentials
from trello_cli.exceptions import ValidationError
from trello_cli.locator import (
    fetch_board,
    fetch_board_labels,
    fetch_board_lists,
    fetch_card,
    fetch_list,
    fetch_list_cards,
    locate_boards,
    resolve_list,
)
from trello_cli.models import BOTTOM, TOP, Card, CardUpdate, PositionRequest, TrelloList
from trello_cli.positions import compute_position, sibling_positions
from trello_cli.search import find_cards
from trello_cli.updates import apply_card_update


def _as_position(position):
    if isinstance(position, PositionRequest):
        return position
    if isinstance(position, int) and not isinstance(position, bool):
        return PositionRequest.parse(str(position))
    return PositionRequest.parse(position)


class TrelloClient:
    """Public API surface for Trello.

    All methods use keyword-only options and return plain dicts suitable
    for JSON serialization. Raises CliError subclasses on failure.
    """

    def __init__(self, *, credential=None, transport=None, sources=None):
        """Initialize the client.

        Args:
            credential: A resolved Credential. Resolved from *sources*
                (environment, then config file) when omitted.
            transport: Pre-built transport (tests, custom base URL). When
                given, no credential resolution happens.
            sources: Credential sources passed to resolve_credentials().
        """
        if transport is None:
            if credential is None:
                credential = resolve_credentials(sources)
            transport = TrelloTransport(credential)
        self.transport = transport

    # -------------------------------------------------------------------
    # Read commands
    # -------------------------------------------------------------------

    def list_boards(self, *, board: str | None = None) -> dict[str, Any]:
        """List the member's open boards.

        Args:
            board: Optional board ID or case-insensitive name substring.

        Returns:
            dict with ``boards`` (id, name) and, when empty, a ``notice``.
        """
        boards = locate_boards(self.transport, board)
        result: dict[str, Any] = {"boards": [{"id": b.id, "name": b.name} for b in boards]}
        if not boards:
            result["notice"] = (
                f"No boards matching '{board}' found" if board is not None else "No boards found"
            )
        return result

    def find_cards(
        self,
        pattern: str = "",
        *,
        board: str | None = None,
        list_name: str | None = None,
    ) -> dict[str, Any]:
        """Search card names with a case-insensitive regex.

        Args:
            pattern: Regular expression; ``""`` matches every card.
            board: Optional board ID or name substring.
            list_name: Optional list name substring.

        Returns:
            dict with ``cards`` (id, board, list, title), ``count`` and,
            when empty, a ``notice``.
        """
        return find_cards(self.transport, pattern, board, list_name).to_dict()

    def show_card(self, card_id: str, *, include_comments: bool = False) -> dict[str, Any]:
        """Get details for a single card.

        Args:
            card_id: Card ID.
            include_comments: Also drain the full comment feed.

        Returns:
            dict with id, name, board, list, labels, description, archived
            and, when requested, comments (oldest first).
        """
        card = fetch_card(self.transport, card_id)
        board = fetch_board(self.transport, card.board_id)
        lst = fetch_list(self.transport, card.list_id)
        labels = [
            {"name": lbl.name, "color": lbl.color}
            for lbl in fetch_board_labels(self.transport, card.board_id)
            if lbl.id in card.label_ids
        ]
        detail: dict[str, Any] = {
            "id": card.id,
            "name": card.name,
            "board": board.name,
            "list": lst.name,
            "labels": labels,
            "description": card.description,
            "archived": card.closed,
        }
        if include_comments:
            detail["comments"] = self.list_comments(card_id)
        return detail

    def list_comments(self, card_id: str) -> list[dict[str, Any]]:
        """Every comment on a card, oldest first."""
        return [c.to_dict() for c in fetch_all_comments(self.transport, card_id)]

    # -------------------------------------------------------------------
    # Card mutations
    # -------------------------------------------------------------------

    def update_card(
        self,
        card_id: str,
        *,
        description: str | None = None,
        add_labels: list[str] | None = None,
        clear_labels: list[str] | None = None,
        comment: str | None = None,
        archive: bool = False,
    ) -> dict[str, Any]:
        """Apply several changes to one card.

        Steps always run in the order description, apply labels, clear
        labels, comment, archive. The first failing step raises
        PartialCompositeFailure; earlier steps are not rolled back.

        Returns:
            dict with ok=True, card_id and one entry per applied step.
        """
        ops = CardUpdate.from_kwargs(
            description=description,
            add_labels=add_labels,
            clear_labels=clear_labels,
            comment=comment,
            archive=archive,
        )
        return self.apply_update(card_id, ops)

    def apply_update(self, card_id: str, ops: CardUpdate) -> dict[str, Any]:
        return apply_card_update(self.transport, card_id, ops).to_dict()

    def label_card(self, card_id: str, label: str, *, clear: bool = False) -> dict[str, Any]:
        """Apply (or with *clear*, remove) every board label named *label*."""
        if clear:
            return self.update_card(card_id, clear_labels=[label])
        return self.update_card(card_id, add_labels=[label])

    def comment_card(self, card_id: str, text: str) -> dict[str, Any]:
        """Post a comment. Blank text is rejected."""
        if not (text or "").strip():
            raise ValidationError("[ERROR] Comment text cannot be empty.")
        return self.update_card(card_id, comment=text)

    def archive_card(self, card_id: str) -> dict[str, Any]:
        """Archive a card (reversible with restore_card)."""
        return self.update_card(card_id, archive=True)

    def restore_card(self, card_id: str) -> dict[str, Any]:
        """Restore an archived card. A card that is not archived is left alone.

        Returns:
            dict with ok=True, card_id, name and ``changed``.
        """
        card = fetch_card(self.transport, card_id)
        if card.closed:
            self.transport.put(f"/cards/{card.id}", {"closed": False})
        return {"ok": True, "card_id": card.id, "name": card.name, "changed": card.closed}

    def create_card(
        self,
        list_filter: str,
        name: str,
        *,
        board: str | None = None,
        description: str | None = None,
        position: str | None = None,
    ) -> dict[str, Any]:
        """Create a card in the list matching *list_filter*.

        Args:
            list_filter: List ID, or a name substring that must match
                exactly one list across the boards in scope.
            name: Card title (non-blank).
            board: Optional board ID or name substring narrowing the lists.
            description: Optional card description.
            position: ``top`` or ``bottom``.

        Returns:
            dict with ok=True, id, name, list and url.
        """
        if not (name or "").strip():
            raise ValidationError("[ERROR] Card name cannot be empty.")
        pos = None
        if position is not None:
            pos = (position or "").strip().lower()
            if pos not in (TOP, BOTTOM):
                raise ValidationError(
                    f"[ERROR] Invalid position '{position}' for a new card. Use top or bottom."
                )
        lst = resolve_list(self.transport, list_filter, board)
        body: dict[str, Any] = {"idList": lst.id, "name": name}
        if description:
            body["desc"] = description
        if pos:
            body["pos"] = pos
        raw = self.transport.post("/cards", body)
        created = Card.from_api(raw)
        return {
            "ok": True,
            "id": created.id,
            "name": created.name,
            "list": lst.name,
            "url": raw.get("shortUrl"),
        }

    # -------------------------------------------------------------------
    # Reordering
    # -------------------------------------------------------------------

    def move_card(self, card_id: str, position: Any) -> dict[str, Any]:
        """Move a card within its list.

        Args:
            card_id: Card ID.
            position: ``top``, ``bottom``, a 1-based position (str or int),
                or a PositionRequest.

        Returns:
            dict with ok=True, id, name and the applied position value.
        """
        request = _as_position(position)
        siblings = None
        if request.needs_siblings:
            card = fetch_card(self.transport, card_id)
            siblings = sibling_positions(
                fetch_list_cards(self.transport, card.list_id), exclude_id=card.id
            )
        value = compute_position(request, siblings)
        updated = Card.from_api(self.transport.put(f"/cards/{card_id}", {"pos": value}))
        return {"ok": True, "id": updated.id, "name": updated.name, "position": value}

    def move_list(self, list_id: str, position: Any) -> dict[str, Any]:
        """Move a list within its board. Same position rules as move_card()."""
        request = _as_position(position)
        siblings = None
        if request.needs_siblings:
            lst = fetch_list(self.transport, list_id)
            siblings = sibling_positions(
                fetch_board_lists(self.transport, lst.board_id), exclude_id=lst.id
            )
        value = compute_position(request, siblings)
        updated = TrelloList.from_api(self.transport.put(f"/lists/{list_id}", {"pos": value}))
        return {"ok": True, "id": updated.id, "name": updated.name, "position": value}
