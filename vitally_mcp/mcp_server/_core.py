"""Core helpers: client caching, _call dispatcher, response contract, id validation."""

from __future__ import annotations

import json
import re

from vitally_mcp import SetupError, TransportError, VitallyClient, VitallyError
from vitally_mcp.config import CONTRACT_SCHEMA_VERSION

_client: VitallyClient | None = None


def _get_client() -> VitallyClient:
    """Return a cached VitallyClient, creating one on first use."""
    global _client
    if _client is None:
        _client = VitallyClient()
    return _client


def _contract_error(message: str, error_type: str = "error", status: int | None = None) -> dict:
    """Return a stable MCP error envelope."""
    out = {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "type": error_type,
        "error": message,
    }
    if status is not None:
        out["status"] = status
    return out


def _finalize_tool_result(result) -> str:
    """Serialize a tool result to the JSON string handed back to the MCP host."""
    return json.dumps(result, ensure_ascii=False)


_ALLOWED_METHODS = {
    "list_resources",
    "get_resource",
    "create_resource",
    "update_resource",
    "delete_resource",
}

_BAD_ID_CHARS = re.compile(r"[/?#\s]")


def _validate_id(value: str, field: str = "id") -> str:
    """Validate that an id is a single, non-empty path segment. Raises VitallyError if not."""
    if not isinstance(value, str) or not value.strip() or _BAD_ID_CHARS.search(value.strip()):
        raise VitallyError(
            f"[ERROR] {field} must be a non-empty id without '/', '?', '#' or spaces, "
            f"got: {value!r}"
        )
    return value.strip()


def _validate_choice(value: str | None, valid: set[str], field: str) -> str | None:
    """Validate an optional enum-like filter value."""
    if value is None or value == "":
        return None
    if value not in valid:
        raise VitallyError(
            f"[ERROR] Invalid {field} '{value}'. Valid: {', '.join(sorted(valid))}"
        )
    return value


def _call(method_name: str, **kwargs):
    """Call a VitallyClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        return getattr(client, method_name)(**kwargs)
    except SetupError as e:
        return _contract_error(str(e), "setup")
    except TransportError as e:
        return _contract_error(str(e), "transport", status=e.status)
    except VitallyError as e:
        return _contract_error(str(e), "error")
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")


def _run(method_name: str, **kwargs) -> str:
    """Dispatch a client call and serialize the outcome."""
    return _finalize_tool_result(_call(method_name, **kwargs))


def _invalid(e: VitallyError) -> str:
    """Serialize an input validation failure."""
    return _finalize_tool_result(_contract_error(str(e), "error"))
