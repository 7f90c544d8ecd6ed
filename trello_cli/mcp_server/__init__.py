"""MCP server exposing TrelloClient methods as tools.

Package structure:
  __init__.py       — FastMCP init, register() calls, re-exports
  __main__.py       — ``python -m trello_cli.mcp_server`` entry point
  _core.py          — Client caching, _call dispatcher, response contract, ID validation
  _tools_read.py    — 3 board/search/detail tools
  _tools_write.py   — 4 update/reorder/create tools

Run: python -m trello_cli.mcp_server
Requires: pip install .[mcp]
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from trello_cli.mcp_server import _tools_read, _tools_write

mcp = FastMCP(
    "trello",
    instructions=(
        "Trello board and card tools. "
        "Card and list IDs passed to write tools must be 24-char hex IDs; "
        "use find_cards to look them up. "
        "Positions are 'top', 'bottom', or 1-based numbers. "
        "update_card runs its steps in a fixed order and does not roll back "
        "steps that succeeded before a failure."
    ),
)

for _mod in [_tools_read, _tools_write]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

from trello_cli.mcp_server._core import (  # noqa: E402, F401
    MCP_RESPONSE_MODE,
    _call,
    _client,
    _contract_error,
    _ensure_contract_dict,
    _finalize_tool_result,
    _get_client,
    _validate_id,
)
from trello_cli.mcp_server._tools_read import (  # noqa: E402, F401
    find_cards,
    list_boards,
    show_card,
)
from trello_cli.mcp_server._tools_write import (  # noqa: E402, F401
    create_card,
    move_card,
    move_list,
    update_card,
)


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()
