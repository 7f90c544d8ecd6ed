"""
HTTP request layer and security helpers for trello-cli.
"""

import json
import re
import sys
import time
import urllib.error
import urllib.parse
import urllib.request

from trello_cli import config
from trello_cli.exceptions import HTTPError, TransportError

_SENSITIVE_PARAMS = frozenset({"key", "token"})


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _sanitize_url_for_log(url):
    """Mask credential query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in _SENSITIVE_PARAMS:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _error_envelope(message, status=None, detail=None):
    """Build a consistent CLI-safe HTTP error message."""
    suffix = f" (status={status})" if status is not None else ""
    body = f"[ERROR] {message}{suffix}"
    if detail:
        body += f"\n{detail}"
    return body


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _http_request(url, data=None, headers=None, method="GET"):
    """Make one HTTP request. Returns parsed JSON (or None for an empty body).
    Raises HTTPError for HTTP errors (caller maps specific codes).
    Raises TransportError on network/timeout/parse errors."""
    body = json.dumps(data).encode("utf-8") if data is not None else None
    safe_url = _sanitize_url_for_log(url)
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    start = time.perf_counter()
    _log_http_event(phase="request", method=method, url=safe_url, timeout_seconds=timeout)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=getattr(resp, "status", 200),
                bytes=len(raw),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
            )
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        _log_http_event(
            phase="response",
            method=method,
            url=safe_url,
            status=e.code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        _log_http_event(phase="network_error", method=method, url=safe_url, error="timeout")
        raise TransportError(
            _error_envelope(f"Request timed out after {timeout} seconds. Is Trello reachable?")
        ) from e
    except urllib.error.URLError as e:
        _log_http_event(
            phase="network_error", method=method, url=safe_url, error=f"url_error: {e.reason}"
        )
        raise TransportError(_error_envelope(f"Connection failed: {e.reason}")) from e

    if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
        raise TransportError(
            f"[ERROR] Response too large from Trello API (>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
        )
    if not raw.strip():
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        if content_type and "json" not in content_type.lower():
            raise TransportError(
                f"[ERROR] Unexpected Content-Type from server ({content_type}). "
                "This may be a proxy or network issue."
            ) from None
        raise TransportError(
            "[ERROR] Unexpected response from Trello API (not valid JSON)."
        ) from None


def _transport_error_from_http(err, method, path):
    """Map an HTTPError to a TransportError with a user-facing message."""
    if err.code in (401, 403):
        return TransportError(
            _error_envelope(
                "Trello rejected the API key/token. Check TRELLO_API_KEY/TRELLO_API_TOKEN "
                "or the config file",
                status=err.code,
            ),
            status=err.code,
        )
    if err.code == 404:
        return TransportError(
            _error_envelope(f"Not found: {method} {path}", status=404), status=404
        )
    if err.code == 429:
        return TransportError(
            "[ERROR] Rate limit reached (status=429). Wait a few seconds and retry.",
            status=429,
        )
    return TransportError(
        _error_envelope(
            f"HTTP {err.code}: {err.reason}",
            status=err.code,
            detail=_sanitize_error(err.body),
        ),
        status=err.code,
    )


class TrelloTransport:
    """Authenticated JSON requests against the Trello REST API.

    The credential is read-only for the lifetime of the transport and is
    sent as ``key``/``token`` query parameters.
    """

    def __init__(self, credential, base_url=None):
        self._credential = credential
        self.base_url = (base_url or config.BASE_URL).rstrip("/")

    def __repr__(self):
        return f"TrelloTransport(base_url={self.base_url!r})"

    def build_url(self, path, params=None):
        query = list((params or {}).items())
        query += [("key", self._credential.key), ("token", self._credential.token)]
        return f"{self.base_url}{path}?{urllib.parse.urlencode(query)}"

    def request(self, method, path, params=None, body=None):
        url = self.build_url(path, params)
        headers = {"Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = "application/json"
        try:
            return _http_request(url, body, headers, method)
        except HTTPError as e:
            raise _transport_error_from_http(e, method, path) from e

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, body=None, params=None):
        return self.request("POST", path, params=params, body=body if body is not None else {})

    def put(self, path, body=None, params=None):
        return self.request("PUT", path, params=params, body=body if body is not None else {})

    def delete(self, path, params=None):
        return self.request("DELETE", path, params=params)
