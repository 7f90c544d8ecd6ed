"""Low-level table rendering helpers (stdlib only)."""

import re

_CONTROL_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def _trunc(s, maxlen):
    """Truncate string with ellipsis indicator."""
    if not s:
        return ""
    return s[: maxlen - 1] + "…" if len(s) > maxlen else s


def _sanitize_str(s):
    """Strip ANSI escape sequences and control chars from terminal output.
    Preserves newlines (\\n) and tabs (\\t)."""
    if not s:
        return s
    return _CONTROL_RE.sub("", str(s))


def _cell(value):
    # Board and card names can carry newlines; keep one row per item.
    text = _sanitize_str(value) if isinstance(value, str) else str(value)
    return " ".join(text.split()) if text else ""


def _table(columns, rows, footer=None):
    """Build a fixed-width table.
    columns: list of (name, width) tuples; the last column is not padded.
    rows: list of tuples matching columns."""
    last = len(columns) - 1
    header = " ".join(
        name if i == last else f"{name:<{width}}" for i, (name, width) in enumerate(columns)
    )
    lines = [header, "-" * max(len(header), 60)]
    for row in rows:
        cells = [_cell(v) for v in row]
        lines.append(
            " ".join(
                cell if i == last else f"{cell:<{columns[i][1]}}" for i, cell in enumerate(cells)
            )
        )
    if footer:
        lines.append(f"\n{footer}")
    return "\n".join(lines)
