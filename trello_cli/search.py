"""Card search across every board in scope."""

import re

from trello_cli._utils import _name_contains
from trello_cli.exceptions import ValidationError
from trello_cli.locator import fetch_board_cards, fetch_board_lists, locate_boards
from trello_cli.models import CardMatch, SearchResult


def compile_pattern(pattern):
    """Compile *pattern* case-insensitively. ``""`` matches every card."""
    try:
        return re.compile(pattern or "", re.IGNORECASE)
    except re.error as e:
        raise ValidationError(f"[ERROR] Invalid search pattern '{pattern}': {e}") from None


def find_cards(transport, pattern="", board_filter=None, list_filter=None):
    """Cards whose name matches *pattern*, in board scan then fetch order.

    *board_filter* follows the usual ID-or-substring rule. *list_filter* is a
    case-insensitive substring applied to the list name only. Cards pointing
    at a list the board does not report are skipped.

    Returns:
        SearchResult. An empty result carries a ``notice`` and is not an error.
    """
    regex = compile_pattern(pattern)

    boards = locate_boards(transport, board_filter)
    if not boards:
        if board_filter is None:
            return SearchResult([], notice="No boards found")
        return SearchResult([], notice=f"No boards matching '{board_filter}' found")

    matches = []
    for board in boards:
        cards = fetch_board_cards(transport, board.id)
        list_names = {lst.id: lst.name for lst in fetch_board_lists(transport, board.id)}
        for card in cards:
            list_name = list_names.get(card.list_id)
            if list_name is None:
                continue
            if not regex.search(card.name):
                continue
            if list_filter is not None and not _name_contains(list_name, list_filter):
                continue
            matches.append(CardMatch(id=card.id, board=board.name, list=list_name, title=card.name))

    if not matches:
        return SearchResult([], notice="No cards found")
    return SearchResult(matches)
