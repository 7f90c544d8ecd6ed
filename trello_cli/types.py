"""Typed response definitions for TrelloClient methods.

These TypedDicts document the shape of dicts returned by public API methods.
They are optional; runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import TypedDict

# ---------------------------------------------------------------------------
# Boards
# ---------------------------------------------------------------------------


class BoardRow(TypedDict):
    id: str
    name: str


class BoardListResult(TypedDict, total=False):
    """Return type of TrelloClient.list_boards()."""

    boards: list[BoardRow]
    notice: str


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


class CardMatchRow(TypedDict):
    id: str
    board: str
    list: str
    title: str


class CardSearchResult(TypedDict, total=False):
    """Return type of TrelloClient.find_cards()."""

    cards: list[CardMatchRow]
    count: int
    notice: str


class LabelRow(TypedDict):
    name: str
    color: str | None


class CommentRow(TypedDict):
    date: str
    author: str
    text: str


class CardDetail(TypedDict, total=False):
    """Return type of TrelloClient.show_card()."""

    id: str
    name: str
    board: str
    list: str
    description: str
    archived: bool
    labels: list[LabelRow]
    comments: list[CommentRow]


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


class UpdateStep(TypedDict, total=False):
    step: str
    ok: bool
    labels: list[str]
    unchanged: list[str]
    comment_id: str | None


class CardUpdateResult(TypedDict, total=False):
    """Return type of TrelloClient.update_card()."""

    ok: bool
    card_id: str
    steps: list[UpdateStep]
    skipped: list[str]


class MoveResult(TypedDict):
    """Return type of TrelloClient.move_card() / move_list()."""

    ok: bool
    id: str
    name: str
    position: str | float


class CreatedCard(TypedDict):
    """Return type of TrelloClient.create_card()."""

    ok: bool
    id: str
    name: str
    list: str
    url: str | None
