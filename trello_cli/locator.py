"""
Resolve free-form board/list filters and label names to Trello resources.

A filter that is a 24-char hex string is a canonical ID and is fetched
directly; anything else is a case-insensitive substring match against the
candidates in scope. Nothing is cached: every call hits the API.
"""

from dataclasses import dataclass

from trello_cli._utils import _name_contains, looks_like_id
from trello_cli.exceptions import AmbiguousResourceError, ResourceNotFoundError, TransportError
from trello_cli.models import Board, Card, Label, TrelloList, _expect_list

# ---------------------------------------------------------------------------
# Fetch helpers
# ---------------------------------------------------------------------------


def fetch_member_boards(transport):
    data = transport.get("/members/me/boards", params={"filter": "open"})
    return [Board.from_api(b) for b in _expect_list(data, "boards")]


def fetch_board(transport, board_id):
    return Board.from_api(transport.get(f"/boards/{board_id}"))


def fetch_board_lists(transport, board_id):
    data = transport.get(f"/boards/{board_id}/lists")
    return [TrelloList.from_api(lst) for lst in _expect_list(data, "lists")]


def fetch_board_cards(transport, board_id):
    data = transport.get(f"/boards/{board_id}/cards")
    return [Card.from_api(c) for c in _expect_list(data, "cards")]


def fetch_board_labels(transport, board_id):
    data = transport.get(f"/boards/{board_id}/labels")
    return [Label.from_api(lbl) for lbl in _expect_list(data, "labels")]


def fetch_list(transport, list_id):
    return TrelloList.from_api(transport.get(f"/lists/{list_id}"))


def fetch_list_cards(transport, list_id):
    data = transport.get(f"/lists/{list_id}/cards")
    return [Card.from_api(c) for c in _expect_list(data, "cards")]


def fetch_card(transport, card_id):
    return Card.from_api(transport.get(f"/cards/{card_id}"))


def _fetch_by_id(fetch, transport, resource_id, kind):
    try:
        return fetch(transport, resource_id)
    except TransportError as e:
        if e.status == 404:
            raise ResourceNotFoundError(
                f"[ERROR] {kind} ID '{resource_id}' not found or inaccessible."
            ) from e
        raise


# ---------------------------------------------------------------------------
# Name matching
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NamedItem:
    """A resource candidate with the name of the board it belongs to."""

    id: str
    name: str
    context: str


def filter_by_name(items, query):
    """Items whose ``name`` contains *query*, case-insensitively."""
    return [item for item in items if _name_contains(item.name, query)]


def find_unique_match(items, query):
    """Return the single NamedItem matching *query*.

    Raises ResourceNotFoundError on zero matches, AmbiguousResourceError on
    several (listing each candidate with its board).
    """
    matches = filter_by_name(items, query)
    if not matches:
        raise ResourceNotFoundError(f"[ERROR] No matches found for '{query}'.")
    if len(matches) > 1:
        options = ", ".join(f"{m.name} (board: {m.context})" for m in matches)
        raise AmbiguousResourceError(
            f"[ERROR] Multiple matches found for '{query}': {options}. "
            "Use -b/--board to disambiguate."
        )
    return matches[0]


# ---------------------------------------------------------------------------
# Boards and lists
# ---------------------------------------------------------------------------


def locate_boards(transport, board_filter=None):
    """Boards in scope for *board_filter*.

    None means every open board of the member. An empty result is the
    "no match" signal; uniqueness is not enforced.
    """
    if board_filter is None:
        return fetch_member_boards(transport)
    if looks_like_id(board_filter):
        return [_fetch_by_id(fetch_board, transport, board_filter, "Board")]
    return filter_by_name(fetch_member_boards(transport), board_filter)


def locate_board(transport, board_filter):
    """The single board matching *board_filter*."""
    if looks_like_id(board_filter):
        return _fetch_by_id(fetch_board, transport, board_filter, "Board")
    boards = fetch_member_boards(transport)
    match = find_unique_match([NamedItem(b.id, b.name, b.name) for b in boards], board_filter)
    return next(b for b in boards if b.id == match.id)


def locate_lists(transport, list_filter, boards):
    """(list, board) pairs whose list name contains *list_filter* across *boards*."""
    pairs = []
    for board in boards:
        for lst in fetch_board_lists(transport, board.id):
            if _name_contains(lst.name, list_filter):
                pairs.append((lst, board))
    return pairs


def resolve_list(transport, list_filter, board_filter=None):
    """The single list matching *list_filter*, optionally scoped to boards
    matching *board_filter*."""
    if looks_like_id(list_filter):
        return _fetch_by_id(fetch_list, transport, list_filter, "List")
    boards = locate_boards(transport, board_filter)
    if not boards:
        if board_filter is None:
            raise ResourceNotFoundError("[ERROR] No boards found.")
        raise ResourceNotFoundError(f"[ERROR] No boards matching '{board_filter}' found.")
    pairs = locate_lists(transport, list_filter, boards)
    match = find_unique_match(
        [NamedItem(lst.id, lst.name, board.name) for lst, board in pairs], list_filter
    )
    return next(lst for lst, _board in pairs if lst.id == match.id)


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def resolve_labels_by_name(names, board_labels):
    """Board labels whose name exactly equals (case-sensitive) one of *names*.

    Label names are not unique on Trello, so one name may yield several
    labels. Order follows *board_labels*; each label appears once.
    """
    wanted = set(names)
    seen = set()
    matched = []
    for label in board_labels:
        if label.name in wanted and label.id not in seen:
            seen.add(label.id)
            matched.append(label)
    return matched


def missing_label_names(names, board_labels):
    """Requested names that match no board label, in request order."""
    present = {label.name for label in board_labels}
    missing = []
    for name in names:
        if name not in present and name not in missing:
            missing.append(name)
    return missing
