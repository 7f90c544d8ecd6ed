"""
Shared test fixtures for trello-cli tests.
Resets process-wide config flags and provides a recording fake transport
so components run without network access.
"""

import pytest

from trello_cli import config
from trello_cli.exceptions import TransportError


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state."""
    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "RUNTIME_QUIET", False)
    monkeypatch.setattr(config, "RUNTIME_VERBOSE", False)
    monkeypatch.setattr(config, "MCP_RESPONSE_MODE", "legacy")


class FakeTransport:
    """Stands in for TrelloTransport.

    ``routes`` maps ``(method, path)`` to a response. A response may be a
    plain value, an exception instance (raised), or a callable taking
    ``(params, body)``. queue() serves a different response per call.
    Every call is appended to ``calls`` as ``(method, path, params, body)``.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.queues = {}
        self.calls = []

    def request(self, method, path, params=None, body=None):
        self.calls.append((method, path, params, body))
        key = (method, path)
        if self.queues.get(key):
            response = self.queues[key].pop(0)
        elif key in self.routes:
            response = self.routes[key]
        else:
            raise TransportError(f"[ERROR] Not found: {method} {path} (status=404)", status=404)
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(params, body)
        return response

    def queue(self, method, path, responses):
        """Serve *responses* one per call for ``(method, path)``."""
        self.queues[(method, path)] = list(responses)

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, body=None, params=None):
        return self.request("POST", path, params=params, body=body)

    def put(self, path, body=None, params=None):
        return self.request("PUT", path, params=params, body=body)

    def delete(self, path, params=None):
        return self.request("DELETE", path, params=params)

    def calls_to(self, method=None, path=None):
        return [
            c
            for c in self.calls
            if (method is None or c[0] == method) and (path is None or c[1] == path)
        ]

    @property
    def mutations(self):
        return [(m, p) for m, p, _params, _body in self.calls if m != "GET"]


@pytest.fixture
def fake_transport():
    return FakeTransport()


def hex_id(n):
    """A valid 24-char hex ID ending in *n*."""
    return f"{n:024x}"
