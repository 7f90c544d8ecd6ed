"""Output formatting package for trello-cli.

Re-exports all public names so consumers can do:
    from trello_cli.formatters import format_cards_table
"""

from trello_cli.formatters._cards import (
    format_boards_table,
    format_card_detail,
    format_cards_table,
    format_cards_tsv,
    format_comments,
    format_update_summary,
)
from trello_cli.formatters._core import (
    mutation_response,
    notice,
    output,
    pretty_print,
)
from trello_cli.formatters._table import (
    _CONTROL_RE,
    _sanitize_str,
    _table,
    _trunc,
)

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_boards_table",
    "format_card_detail",
    "format_cards_table",
    "format_cards_tsv",
    "format_comments",
    "format_update_summary",
    "mutation_response",
    "notice",
    "output",
    "pretty_print",
]
