"""Tests for MCP server tool wrappers.

Mocks at TrelloClient level. Verifies each tool calls the correct
client method and that errors are converted to dicts.
"""

import pytest

mcp_mod = pytest.importorskip("trello_cli.mcp_server", reason="mcp package not installed")

import importlib  # noqa: E402
from unittest.mock import MagicMock, patch  # noqa: E402

from trello_cli.exceptions import (  # noqa: E402
    CredentialError,
    PartialCompositeFailure,
    TransportError,
)

_core = importlib.import_module("trello_cli.mcp_server._core")

_C1 = "5f1a2b3c4d5e6f7a8b9c0d1e"
_L1 = "aaaaaaaaaaaaaaaaaaaaaaaa"
_BAD = "not-an-id"


@pytest.fixture(autouse=True)
def _reset_client_cache():
    """Reset the cached TrelloClient between tests."""
    _core._client = None
    yield
    _core._client = None


def _mock_client(**method_returns):
    client = MagicMock()
    for name, val in method_returns.items():
        getattr(client, name).return_value = val
    return client


class TestReadTools:
    @patch("trello_cli.mcp_server._core.TrelloClient")
    def test_list_boards(self, MockClient):
        MockClient.return_value = _mock_client(list_boards={"boards": [{"id": "b", "name": "B"}]})
        result = mcp_mod.list_boards()
        assert result["ok"] is True
        assert result["schema_version"] == _core.CONTRACT_SCHEMA_VERSION
        assert result["boards"][0]["name"] == "B"

    @patch("trello_cli.mcp_server._core.TrelloClient")
    def test_find_cards_forwards_filters(self, MockClient):
        client = _mock_client(find_cards={"cards": [], "count": 0, "notice": "No cards found"})
        MockClient.return_value = client
        result = mcp_mod.find_cards("^Bug", board="Eng", list_name="todo")
        client.find_cards.assert_called_once_with(pattern="^Bug", board="Eng", list_name="todo")
        assert result["notice"] == "No cards found"

    def test_show_card_rejects_bad_id(self):
        result = mcp_mod.show_card(_BAD)
        assert result["ok"] is False
        assert result["type"] == "validation"
        assert "24-char hex" in result["error"]


class TestWriteTools:
    @patch("trello_cli.mcp_server._core.TrelloClient")
    def test_update_card(self, MockClient):
        client = _mock_client(update_card={"ok": True, "card_id": _C1, "steps": []})
        MockClient.return_value = client
        mcp_mod.update_card(_C1, add_labels=["Bug"], archive=True)
        client.update_card.assert_called_once_with(
            card_id=_C1,
            description=None,
            add_labels=["Bug"],
            clear_labels=None,
            comment=None,
            archive=True,
        )

    @patch("trello_cli.mcp_server._core.TrelloClient")
    def test_partial_failure_becomes_error_dict(self, MockClient):
        client = MagicMock()
        client.update_card.side_effect = PartialCompositeFailure(
            "comment", ["description"], TransportError("[ERROR] HTTP 500", status=500)
        )
        MockClient.return_value = client
        result = mcp_mod.update_card(_C1, description="x", comment="y")
        assert result["ok"] is False
        assert result["type"] == "partial_failure"
        assert "failed at step 'comment'" in result["error"]

    def test_move_list_rejects_bad_id(self):
        result = mcp_mod.move_list(_BAD, "top")
        assert result["ok"] is False
        assert "list_id" in result["error"]

    @patch("trello_cli.mcp_server._core.TrelloClient")
    def test_move_card(self, MockClient):
        client = _mock_client(move_card={"ok": True, "id": _C1, "name": "A", "position": 1.5})
        MockClient.return_value = client
        assert mcp_mod.move_card(_C1, "2")["position"] == 1.5
        client.move_card.assert_called_once_with(card_id=_C1, position="2")

    @patch("trello_cli.mcp_server._core.TrelloClient")
    def test_create_card(self, MockClient):
        client = _mock_client(create_card={"ok": True, "id": _L1, "name": "N"})
        MockClient.return_value = client
        mcp_mod.create_card("To Do", "N", position="top")
        client.create_card.assert_called_once_with(
            list_filter="To Do", name="N", board=None, description=None, position="top"
        )


class TestContract:
    @patch("trello_cli.mcp_server._core.TrelloClient")
    def test_credential_error_is_setup_type(self, MockClient):
        MockClient.side_effect = CredentialError("[SETUP_NEEDED] missing")
        result = mcp_mod.list_boards()
        assert result["ok"] is False
        assert result["type"] == "setup"
        assert result["error_detail"]["message"] == "[SETUP_NEEDED] missing"

    def test_unknown_method(self):
        assert _core._call("delete_everything")["ok"] is False

    def test_envelope_mode(self, monkeypatch):
        monkeypatch.setattr(_core, "MCP_RESPONSE_MODE", "envelope")
        result = _core._finalize_tool_result({"boards": []})
        assert result == {
            "ok": True,
            "schema_version": _core.CONTRACT_SCHEMA_VERSION,
            "data": {"boards": []},
        }

    def test_client_is_cached(self):
        with patch("trello_cli.mcp_server._core.TrelloClient") as MockClient:
            assert _core._get_client() is _core._get_client()
        MockClient.assert_called_once_with()
