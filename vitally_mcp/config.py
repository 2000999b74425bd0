"""
vitally-mcp shared configuration, constants, and module-level state.
Standalone module — no imports from other project files except exceptions.
"""

import os

from vitally_mcp.exceptions import SetupError

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

# Keys read from os.environ after the .env file (MCP hosts pass settings this way).
ENV_KEYS = (
    "VITALLY_API_KEY",
    "VITALLY_SUBDOMAIN",
    "VITALLY_DATA_CENTER",
    "VITALLY_HTTP_TIMEOUT_SECONDS",
    "VITALLY_HTTP_MAX_RESPONSE_BYTES",
    "VITALLY_HTTP_LOG",
    "VITALLY_HTTP_LOG_SAMPLE_RATE",
)


def load_env():
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in ENV_KEYS:
        value = os.environ.get(key)
        if value:
            env[key] = value.strip()
    return env


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


def _env_float(key, default):
    """Parse float env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.3.0"
CONTRACT_SCHEMA_VERSION = "1.0"

US_BASE_URL_TEMPLATE = "https://{subdomain}.rest.vitally.io"
EU_BASE_URL = "https://rest.vitally-eu.io"
VALID_DATA_CENTERS = {"US", "EU"}

DEFAULT_LIST_LIMIT = 20
MAX_LIST_LIMIT = 100
VALID_SORT_FIELDS = {"createdAt", "updatedAt"}
VALID_ACCOUNT_STATUSES = {"active", "churned", "activeOrChurned"}
VALID_NPS_TARGETS = {"accounts", "organization"}

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env and the environment)
# ---------------------------------------------------------------------------

env = load_env()

API_KEY = env.get("VITALLY_API_KEY", "")
SUBDOMAIN = env.get("VITALLY_SUBDOMAIN", "")
DATA_CENTER = env.get("VITALLY_DATA_CENTER", "US").upper()
HTTP_TIMEOUT_SECONDS = _env_int("VITALLY_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("VITALLY_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("VITALLY_HTTP_LOG", False)
HTTP_LOG_SAMPLE_RATE = min(1.0, max(0.0, _env_float("VITALLY_HTTP_LOG_SAMPLE_RATE", 1.0)))


def base_url(subdomain=None, data_center=None):
    """Return the REST base URL for the configured data center."""
    center = (data_center or DATA_CENTER or "US").upper()
    if center not in VALID_DATA_CENTERS:
        raise SetupError(
            f"[SETUP_NEEDED] VITALLY_DATA_CENTER must be one of "
            f"{', '.join(sorted(VALID_DATA_CENTERS))}, got: {center!r}"
        )
    if center == "EU":
        return EU_BASE_URL
    return US_BASE_URL_TEMPLATE.format(subdomain=subdomain or SUBDOMAIN)


def require_credentials(api_key=None, subdomain=None):
    """Return (api_key, subdomain), raising SetupError naming every missing value."""
    api_key = (api_key if api_key is not None else API_KEY).strip()
    subdomain = (subdomain if subdomain is not None else SUBDOMAIN).strip()
    missing = []
    if not api_key:
        missing.append("VITALLY_API_KEY")
    if not subdomain:
        missing.append("VITALLY_SUBDOMAIN")
    if missing:
        raise SetupError(
            f"[SETUP_NEEDED] Required environment variable(s) not set: "
            f"{', '.join(missing)}. Configure them in your MCP client settings or .env."
        )
    return api_key, subdomain
