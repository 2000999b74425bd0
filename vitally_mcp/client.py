"""
VitallyClient — public Python API over the Vitally REST resources.

Single entry point for programmatic use and the MCP server. List and get
responses are projected onto the requested (or default) fields; create,
update and delete responses pass through unfiltered.
"""

from __future__ import annotations

from typing import Any

from vitally_mcp import config
from vitally_mcp.api import _safe_json_parse, basic_auth_header, vitally_request
from vitally_mcp.exceptions import VitallyError
from vitally_mcp.projection import parse_document, parse_selector, project
from vitally_mcp.resources import resource_type_for_path


def _clamp_limit(limit):
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        raise VitallyError(f"[ERROR] limit must be an integer, got: {limit!r}") from None
    return max(1, min(config.MAX_LIST_LIMIT, limit))


def _coerce_body(body, context):
    """Accept a dict or JSON object text as a request body."""
    if isinstance(body, str):
        body = _safe_json_parse(body, context)
    if not isinstance(body, dict):
        raise VitallyError(
            f"[ERROR] Invalid JSON in {context}: expected object, got {type(body).__name__}."
        )
    return body


def _parse_write_response(raw):
    if not raw or not raw.strip():
        return {}
    return parse_document(raw)


class VitallyClient:
    """Issues list/get/create/update/delete calls against /resources/<path>.

    Holds only the base URL and the Authorization header built once at
    construction; safe to share across concurrent tool calls.
    """

    def __init__(
        self,
        api_key: str | None = None,
        subdomain: str | None = None,
        data_center: str | None = None,
    ):
        api_key, subdomain = config.require_credentials(api_key, subdomain)
        self.base_url = config.base_url(subdomain, data_center)
        self._auth_header = basic_auth_header(api_key)

    def _request(self, method, path, params=None, data=None):
        return vitally_request(self.base_url, self._auth_header, method, path, params, data)

    # -- reads (projected) --

    def list_resources(
        self,
        path: str,
        limit: int = config.DEFAULT_LIST_LIMIT,
        cursor: str | None = None,
        sort_by: str | None = None,
        extra_params: dict[str, Any] | None = None,
        fields: str | list[str] | None = None,
        traits: str | list[str] | None = None,
    ) -> Any:
        """List a resource collection and project every result.

        Args:
            path: Collection path under /resources (e.g. ``accounts`` or
                ``organizations/<id>/accounts``).
            cursor: The ``next`` value of the previous page (sent as ``from``).
            extra_params: Resource-specific filters merged into the query as-is.

        Returns:
            Dict with ``results`` and, when the upstream sent one, ``next``.
        """
        if sort_by and sort_by not in config.VALID_SORT_FIELDS:
            raise VitallyError(
                f"[ERROR] Invalid sortBy '{sort_by}'. "
                f"Valid: {', '.join(sorted(config.VALID_SORT_FIELDS))}"
            )
        params: dict[str, Any] = {"limit": _clamp_limit(limit)}
        if cursor:
            params["from"] = cursor
        if sort_by:
            params["sortBy"] = sort_by
        for key, value in (extra_params or {}).items():
            if value is not None and value != "":
                params[key] = value
        raw = self._request("GET", path, params)
        return project(
            raw,
            parse_selector(fields),
            resource_type_for_path(path),
            True,
            parse_selector(traits),
        )

    def get_resource(
        self,
        path: str,
        resource_id: str,
        fields: str | list[str] | None = None,
        traits: str | list[str] | None = None,
    ) -> Any:
        """Fetch one resource by id and project it."""
        raw = self._request("GET", f"{path}/{resource_id}")
        return project(
            raw,
            parse_selector(fields),
            resource_type_for_path(path),
            False,
            parse_selector(traits),
        )

    # -- writes (unfiltered) --

    def create_resource(self, path: str, body: dict | str) -> Any:
        """POST a new resource; the response passes through unfiltered."""
        data = _coerce_body(body, "json_body")
        return _parse_write_response(self._request("POST", path, data=data))

    def update_resource(self, path: str, resource_id: str, body: dict | str) -> Any:
        """PUT changes to an existing resource; the response passes through unfiltered."""
        data = _coerce_body(body, "json_body")
        return _parse_write_response(self._request("PUT", f"{path}/{resource_id}", data=data))

    def delete_resource(self, path: str, resource_id: str) -> Any:
        """DELETE a resource. Empty upstream bodies come back as {}."""
        return _parse_write_response(self._request("DELETE", f"{path}/{resource_id}"))
