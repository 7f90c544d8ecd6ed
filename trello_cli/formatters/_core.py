"""Core output dispatchers."""

import json
import sys

from trello_cli import config


def pretty_print(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output(data, formatter=None, fmt="table", tsv_formatter=None):
    """Output data in requested format. JSON is the fallback."""
    if fmt == "tsv" and tsv_formatter:
        print(tsv_formatter(data))
    elif fmt in ("table", "tsv") and formatter:
        print(formatter(data))
    else:
        pretty_print(data)


def notice(message):
    """Print an informational line to stderr unless --quiet is active."""
    if message and not config.RUNTIME_QUIET:
        print(message, file=sys.stderr)


def mutation_response(summary, data=None, fmt="table"):
    """Print a mutation confirmation: the result dict as JSON, else ``OK: ...``."""
    if fmt == "json":
        pretty_print(data if data is not None else {"ok": True})
        return
    print(f"OK: {summary}")
