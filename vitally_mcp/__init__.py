"""vitally-mcp — MCP tools over the Vitally customer-success REST API."""

from vitally_mcp.client import VitallyClient
from vitally_mcp.config import VERSION
from vitally_mcp.exceptions import ParseError, SetupError, TransportError, VitallyError
from vitally_mcp.projection import project, project_json

__all__ = [
    "VERSION",
    "VitallyClient",
    "VitallyError",
    "SetupError",
    "ParseError",
    "TransportError",
    "project",
    "project_json",
]
