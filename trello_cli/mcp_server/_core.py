"""Core helpers: client caching, _call dispatcher, response contract, ID validation."""

from __future__ import annotations

from trello_cli import CliError, CredentialError, TrelloClient
from trello_cli._utils import looks_like_id
from trello_cli.config import CONTRACT_SCHEMA_VERSION, MCP_RESPONSE_MODE

_client: TrelloClient | None = None


def _get_client() -> TrelloClient:
    """Return a cached TrelloClient, creating one on first use."""
    global _client
    if _client is None:
        _client = TrelloClient()
    return _client


def _contract_error(message: str, error_type: str = "error") -> dict:
    """Return a stable MCP error envelope with legacy compatibility fields."""
    return {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "type": error_type,  # legacy
        "error": message,  # legacy
        "error_detail": {
            "type": error_type,
            "message": message,
        },
    }


def _ensure_contract_dict(payload: dict) -> dict:
    """Add stable contract metadata to dict responses."""
    out = dict(payload)
    out.setdefault("schema_version", CONTRACT_SCHEMA_VERSION)
    if out.get("ok") is False:
        out.setdefault(
            "error_detail",
            {"type": str(out.get("type", "error")), "message": str(out.get("error", ""))},
        )
        return out
    out.setdefault("ok", True)
    return out


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): dicts gain contract metadata (ok/schema_version).
        - envelope: success is always {"ok", "schema_version", "data"}.
    """
    if isinstance(result, dict):
        normalized = _ensure_contract_dict(result)
        if normalized.get("ok") is False or MCP_RESPONSE_MODE != "envelope":
            return normalized
        data = dict(normalized)
        data.pop("ok", None)
        data.pop("schema_version", None)
        return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": data}
    if MCP_RESPONSE_MODE == "envelope":
        return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": result}
    return result


_ALLOWED_METHODS = {
    "list_boards",
    "find_cards",
    "show_card",
    "update_card",
    "move_card",
    "move_list",
    "create_card",
}


def _validate_id(value: str, field: str = "card_id") -> str:
    """Validate that a string is a 24-char hex Trello ID. Raises CliError if not."""
    if not isinstance(value, str) or not looks_like_id(value):
        raise CliError(f"[ERROR] {field} must be a 24-char hex Trello ID, got: {value!r}")
    return value


def _call(method_name: str, **kwargs):
    """Call a TrelloClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        return getattr(client, method_name)(**kwargs)
    except CredentialError as e:
        return _contract_error(str(e), "setup")
    except CliError as e:
        return _contract_error(str(e), e.error_type)
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")
