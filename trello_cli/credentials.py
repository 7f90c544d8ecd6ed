"""
Credential resolution for trello-cli.

Sources are tried in a fixed order and never mixed:

1. ``TRELLO_API_KEY`` + ``TRELLO_API_TOKEN`` (both non-empty) from the environment.
2. ``api_key`` + ``api_token`` from the platform config file (TOML).

Each source takes an explicit accessor (environment mapping, file reader) so
tests can supply deterministic values. Credential values never appear in
error text.
"""

import os
import tomllib
from pathlib import Path

from trello_cli import config
from trello_cli.exceptions import CredentialError
from trello_cli.models import Credential

_FIELDS = ("api_key", "api_token")


def _read_file_bytes(path):
    return Path(path).read_bytes()


class EnvironmentSource:
    """Both environment variables, or nothing."""

    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ

    def describe(self):
        return f"Environment variables {config.API_KEY_ENV} and {config.API_TOKEN_ENV}"

    def load(self):
        """Return (Credential or None, status)."""
        key = self.environ.get(config.API_KEY_ENV) or ""
        token = self.environ.get(config.API_TOKEN_ENV) or ""
        if key and token:
            return Credential(key=key, token=token, source="environment"), "ok"
        if key or token:
            return None, "only one set (both required)"
        return None, "not set"


class ConfigFileSource:
    """TOML file with ``api_key`` and ``api_token`` string fields."""

    def __init__(self, path=None, read_bytes=None):
        self.path = Path(path) if path is not None else config.config_path()
        self.read_bytes = read_bytes or _read_file_bytes

    def describe(self):
        return f"Config file {self.path}"

    def load(self):
        """Return (Credential or None, status)."""
        try:
            raw = self.read_bytes(self.path)
        except FileNotFoundError:
            return None, "not found"
        except OSError as e:
            reason = e.strerror or type(e).__name__
            return None, f"not readable: {self.path}: {reason}"
        try:
            data = tomllib.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            return None, f"parse error: {self.path}: not valid UTF-8 ({e.reason})"
        except tomllib.TOMLDecodeError as e:
            return None, f"parse error: {self.path}: {e}"

        missing = []
        for name in _FIELDS:
            value = data.get(name)
            if value is None or value == "":
                missing.append(name)
            elif not isinstance(value, str):
                return None, f"invalid field {name} (expected string)"
        if len(missing) == 1:
            return None, f"missing field {missing[0]}"
        if missing:
            return None, f"missing fields {', '.join(missing)}"
        return (
            Credential(key=data["api_key"], token=data["api_token"], source=str(self.path)),
            "ok",
        )


def default_sources(environ=None, path=None, read_bytes=None):
    return [EnvironmentSource(environ), ConfigFileSource(path, read_bytes)]


def resolve_credentials(sources=None):
    """Return the first complete Credential, or raise CredentialError listing
    every source checked and its status."""
    if sources is None:
        sources = default_sources()
    checked = []
    for source in sources:
        credential, status = source.load()
        if credential is not None:
            return credential
        checked.append(f"  - {source.describe()}: {status}")
    raise CredentialError(
        "[SETUP_NEEDED] Failed to load Trello credentials.\n"
        "Checked:\n" + "\n".join(checked) + "\n"
        f"Set {config.API_KEY_ENV} and {config.API_TOKEN_ENV}, or create "
        f"{config.CONFIG_DIR_NAME}/{config.CONFIG_FILE_NAME} with api_key and api_token."
    )
