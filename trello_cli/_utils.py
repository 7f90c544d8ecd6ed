"""
Shared pure-utility functions for trello-cli.

These helpers have no business logic and no side effects.
They are used across locator.py, comments.py, formatters, and the MCP server.
"""

import re
from datetime import datetime, timezone

_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


def looks_like_id(value):
    """True if *value* is a canonical 24-char hexadecimal Trello ID."""
    return isinstance(value, str) and _ID_RE.fullmatch(value) is not None


def _parse_iso_timestamp(ts):
    """Parse an ISO timestamp from the API into an aware UTC datetime."""
    if not ts:
        return None
    try:
        # Handle both "2020-03-09T19:41:51Z" and "2020-03-09T19:41:51.396Z"
        clean = ts.replace("Z", "+00:00")
        parsed = datetime.fromisoformat(clean)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_minute(ts):
    """Render a datetime as ``YYYY-MM-DD HH:MM`` in UTC."""
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M")


def sanitize_field(value):
    """Replace tabs and line breaks so a value fits one TSV cell."""
    if not value:
        return ""
    return value.replace("\t", " ").replace("\r", " ").replace("\n", " ")


def _name_contains(name, query):
    """Case-insensitive substring test used by every name filter."""
    return query.casefold() in (name or "").casefold()
