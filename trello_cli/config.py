"""
trello-cli shared configuration, constants, and module-level state.
Standalone module — no imports from other project files.
"""

import os
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Environment helpers
# ---------------------------------------------------------------------------

env = os.environ


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Credential sources
# ---------------------------------------------------------------------------

API_KEY_ENV = "TRELLO_API_KEY"
API_TOKEN_ENV = "TRELLO_API_TOKEN"

CONFIG_DIR_NAME = "trello-cli"
CONFIG_FILE_NAME = "config.toml"


def platform_config_dir(platform=None, environ=None, home=None):
    """Return the per-user configuration directory for this platform."""
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ
    home = Path(home) if home else Path.home()
    if platform.startswith("win"):
        appdata = environ.get("APPDATA")
        return Path(appdata) if appdata else home / "AppData" / "Roaming"
    if platform == "darwin":
        return home / "Library" / "Application Support"
    xdg = environ.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    return home / ".config"


def config_path():
    """Location of the credential file (may not exist)."""
    return platform_config_dir() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.3.0"
CONTRACT_SCHEMA_VERSION = "1.0"

BASE_URL = "https://api.trello.com/1"

COMMENT_PAGE_SIZE = 1000
POSITION_MARGIN = 16384.0
VALID_FORMATS = ("table", "tsv", "json")

# ---------------------------------------------------------------------------
# Runtime settings (loaded from the process environment)
# ---------------------------------------------------------------------------

HTTP_TIMEOUT_SECONDS = _env_int("TRELLO_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("TRELLO_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("TRELLO_HTTP_LOG", False)

MCP_RESPONSE_MODE = env.get("TRELLO_MCP_RESPONSE_MODE", "legacy").strip().lower()
if MCP_RESPONSE_MODE not in {"legacy", "envelope"}:
    MCP_RESPONSE_MODE = "legacy"

# Set by cli.main()
RUNTIME_QUIET = False
RUNTIME_VERBOSE = False
