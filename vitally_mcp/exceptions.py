"""
vitally-mcp exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class VitallyError(Exception):
    """Exit code 1 — validation, network, upstream errors."""

    exit_code = 1


class SetupError(VitallyError):
    """Exit code 2 — missing or rejected API credentials."""

    exit_code = 2


class ParseError(VitallyError):
    """Malformed JSON handed to the projector or sent as a request body."""


class TransportError(VitallyError):
    """Upstream answered with a non-success HTTP status."""

    def __init__(self, message, status, body=""):
        super().__init__(message)
        self.status = status
        self.body = body


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
