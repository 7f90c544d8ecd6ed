"""Board, card, and comment formatters: table, detail, TSV."""

from trello_cli._utils import sanitize_field
from trello_cli.formatters._table import _sanitize_str, _table, _trunc


def format_boards_table(result):
    boards = result.get("boards", [])
    if not boards:
        return "No boards found."
    rows = [(b.get("id", ""), b.get("name", "")) for b in boards]
    return _table([("ID", 24), ("Name", 0)], rows, f"Total: {len(boards)} boards")


def format_cards_table(result):
    """Format ``find`` results as a readable table."""
    cards = result.get("cards", [])
    if not cards:
        return "No cards found."
    cols = [("Board", 20), ("List", 16), ("Title", 44), ("ID", 0)]
    rows = [
        (
            _trunc(c.get("board", ""), 20),
            _trunc(c.get("list", ""), 16),
            _trunc(c.get("title", ""), 44),
            c.get("id", ""),
        )
        for c in cards
    ]
    return _table(cols, rows, f"Total: {len(cards)} cards")


def format_cards_tsv(result):
    """Format ``find`` results as TSV with an ``ID Board List Title`` header."""
    lines = ["ID\tBoard\tList\tTitle"]
    for c in result.get("cards", []):
        lines.append(
            "\t".join(
                sanitize_field(c.get(key, "")) for key in ("id", "board", "list", "title")
            )
        )
    return "\n".join(lines)


def _label_display(label):
    name = label.get("name") or ""
    color = label.get("color")
    if name and color:
        return f"{name} ({color})"
    if name:
        return name
    if color:
        return f"({color})"
    return "(no color)"


def format_comments(comments):
    return "\n".join(
        f"  [{c.get('date', '')}] {_sanitize_str(c.get('author', ''))}: "
        f"{_sanitize_str(c.get('text', ''))}"
        for c in comments
    )


def format_card_detail(card):
    """Format a single card from TrelloClient.show_card()."""
    lines = [
        f"Name: {_sanitize_str(card.get('name', ''))}",
        f"ID: {card.get('id', '')}",
        f"Board: {_sanitize_str(card.get('board', ''))}",
        f"List: {_sanitize_str(card.get('list', ''))}",
    ]
    labels = card.get("labels") or []
    if labels:
        lines.append("Labels: " + ", ".join(_label_display(lbl) for lbl in labels))
    else:
        lines.append("Labels: (none)")
    if card.get("archived"):
        lines.append("Archived: yes")
    description = card.get("description") or ""
    if description:
        lines.append("Description:")
        lines.extend(f"  {line}" for line in _sanitize_str(description).splitlines())
    comments = card.get("comments")
    if comments:
        lines.append("Comments:")
        lines.append(format_comments(comments))
    return "\n".join(lines)


_STEP_TEXT = {
    "description": "updated description",
    "apply_labels": "applied labels",
    "clear_labels": "cleared labels",
    "comment": "posted comment",
    "archive": "archived",
}


def format_update_summary(result):
    """One line per applied step of TrelloClient.update_card()."""
    lines = []
    for step in result.get("steps", []):
        text = _STEP_TEXT.get(step.get("step"), step.get("step", ""))
        changed = step.get("labels")
        unchanged = step.get("unchanged")
        if changed:
            text += ": " + ", ".join(changed)
        if unchanged:
            text += f" (already {'absent' if step.get('step') == 'clear_labels' else 'present'}: "
            text += ", ".join(unchanged) + ")"
        lines.append(f"OK: {text}")
    return "\n".join(lines)
