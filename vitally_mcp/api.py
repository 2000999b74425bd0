"""
HTTP request layer, security helpers, and auth header construction for vitally-mcp.
"""

import base64
import hashlib
import json
import re
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from vitally_mcp import config
from vitally_mcp.exceptions import HTTPError, ParseError, SetupError, TransportError, VitallyError

_SENSITIVE_QUERY_KEYS = frozenset({"apikey", "api_key", "token", "email"})


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _safe_json_parse(text, context="input"):
    """Parse JSON with friendly error message on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"[ERROR] Invalid JSON in {context}: {e.msg} at position {e.pos}"
        ) from None


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def basic_auth_header(api_key):
    """Build the Basic auth header: API key as username, empty password."""
    encoded = base64.b64encode(f"{api_key}:".encode("ascii")).decode("ascii")
    return f"Basic {encoded}"


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _sanitize_url_for_log(url):
    """Mask sensitive query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in _SENSITIVE_QUERY_KEYS:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled (stdout carries MCP stdio)."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.HTTP_LOG_SAMPLE_RATE
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


def _error_envelope(message, status=None, request_id=None, detail=None):
    """Build a consistent caller-safe HTTP error message."""
    meta = []
    if status is not None:
        meta.append(f"status={status}")
    if request_id:
        meta.append(f"request_id={request_id}")
    suffix = f" ({', '.join(meta)})" if meta else ""
    body = f"[ERROR] {message}{suffix}"
    if detail:
        body += f"\n{detail}"
    return body


def _http_request(url, data=None, headers=None, method="GET"):
    """Make a single HTTP request and return the raw response bytes.
    Raises HTTPError for HTTP errors (caller handles specific codes).
    Raises VitallyError on network/timeout/size errors. No retries."""
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = (headers or {}).get("X-Request-Id")
    safe_url = _sanitize_url_for_log(url)
    sampled = _is_sampled_request(request_id)
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)
    start = time.perf_counter()
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    if sampled:
        _log_http_event(
            phase="request",
            method=method,
            url=safe_url,
            request_id=request_id,
            timeout_seconds=timeout,
        )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                raise VitallyError(
                    "[ERROR] Response too large from Vitally API "
                    f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
                )
            if sampled:
                _log_http_event(
                    phase="response",
                    method=method,
                    url=safe_url,
                    status=getattr(resp, "status", 200),
                    content_type=content_type,
                    bytes=len(raw),
                    latency_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
            return raw
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        if sampled:
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=e.code,
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error="timeout",
                request_id=request_id,
            )
        raise VitallyError(
            _error_envelope(
                f"Request timed out after {timeout} seconds. Is the Vitally API reachable?",
                request_id=request_id,
            )
        ) from e
    except urllib.error.URLError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"url_error: {e.reason}",
                request_id=request_id,
            )
        raise VitallyError(
            _error_envelope(f"Connection failed: {e.reason}", request_id=request_id)
        ) from e


def build_url(base_url, path, params=None):
    """Join base URL, /resources/<path> and an encoded query string."""
    url = f"{base_url.rstrip('/')}/resources/{path.strip('/')}"
    if params:
        query = urllib.parse.urlencode(
            [(k, v) for k, v in params.items() if v is not None and v != ""]
        )
        if query:
            url += "?" + query
    return url


def vitally_request(base_url, auth_header, method, path, params=None, data=None):
    """Make an authenticated request against the Vitally REST API.
    Returns the raw response bytes."""
    url = build_url(base_url, path, params)
    headers = {
        "Authorization": auth_header,
        "Accept": "application/json",
        "Content-Type": "application/json",
        "X-Request-Id": str(uuid.uuid4()),
    }
    try:
        return _http_request(url, data, headers, method)
    except HTTPError as e:
        if e.code in (401, 403):
            raise SetupError(
                "[AUTH_FAILED] Vitally rejected the API key "
                f"(HTTP {e.code}). Check VITALLY_API_KEY and VITALLY_SUBDOMAIN."
            ) from e
        server_req_id = e.headers.get("X-Request-Id") if e.headers else None
        if e.code == 429:
            raise TransportError(
                _error_envelope(
                    "Rate limit reached. Wait a few seconds and retry.",
                    status=e.code,
                    request_id=server_req_id,
                ),
                status=e.code,
                body=e.body,
            ) from e
        raise TransportError(
            _error_envelope(
                f"HTTP {e.code}: {e.reason}",
                status=e.code,
                request_id=server_req_id,
                detail=_sanitize_error(e.body),
            ),
            status=e.code,
            body=e.body,
        ) from e
