"""Project and custom-object tools (15 tools)."""

from __future__ import annotations

from typing import Literal
from urllib.parse import parse_qsl

from vitally_mcp import VitallyError
from vitally_mcp.config import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT
from vitally_mcp.mcp_server._core import _invalid, _run, _validate_id

SortField = Literal["createdAt", "updatedAt"]


# ---------------------------------------------------------------------------
# Projects, templates, categories
# ---------------------------------------------------------------------------


def list_projects(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List projects.

    Args:
        fields: Comma-separated. Defaults to id,name,createdAt,updatedAt,accountId,
            organizationId,archivedAt.
        traits: Comma-separated trait names; requires 'traits' in fields.
    """
    return _run(
        "list_resources",
        path="projects",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
        traits=traits,
    )


def get_project(project_id: str, fields: str | None = None, traits: str | None = None) -> str:
    """Get one project by id."""
    try:
        project_id = _validate_id(project_id, "project_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "get_resource", path="projects", resource_id=project_id, fields=fields, traits=traits
    )


def list_project_templates(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    category_id: str | None = None,
    traits: str | None = None,
) -> str:
    """List project templates, optionally narrowed to one project category."""
    return _run(
        "list_resources",
        path="projectTemplates",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        extra_params={"categoryId": category_id},
        fields=fields,
        traits=traits,
    )


def get_project_template(
    template_id: str, fields: str | None = None, traits: str | None = None
) -> str:
    """Get one project template by id."""
    try:
        template_id = _validate_id(template_id, "template_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "get_resource",
        path="projectTemplates",
        resource_id=template_id,
        fields=fields,
        traits=traits,
    )


def list_project_categories(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List project categories."""
    return _run(
        "list_resources",
        path="projectCategories",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
    )


def get_project_category(category_id: str, fields: str | None = None) -> str:
    """Get one project category by id."""
    try:
        category_id = _validate_id(category_id, "category_id")
    except VitallyError as e:
        return _invalid(e)
    return _run("get_resource", path="projectCategories", resource_id=category_id, fields=fields)


# ---------------------------------------------------------------------------
# Custom objects
# ---------------------------------------------------------------------------


def list_custom_objects(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List custom object definitions."""
    return _run(
        "list_resources",
        path="customObjects",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
    )


def get_custom_object(custom_object_id: str, fields: str | None = None) -> str:
    """Get one custom object definition by id."""
    try:
        custom_object_id = _validate_id(custom_object_id, "custom_object_id")
    except VitallyError as e:
        return _invalid(e)
    return _run("get_resource", path="customObjects", resource_id=custom_object_id, fields=fields)


def create_custom_object(json_body: str) -> str:
    """Create a custom object definition. Required fields vary by object type."""
    return _run("create_resource", path="customObjects", body=json_body)


def update_custom_object(custom_object_id: str, json_body: str) -> str:
    """Update a custom object definition."""
    try:
        custom_object_id = _validate_id(custom_object_id, "custom_object_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "update_resource", path="customObjects", resource_id=custom_object_id, body=json_body
    )


def _parse_search_query(search_query):
    """Turn 'k=v&k2=v2' into a param dict. Pairs without a value are ignored."""
    params = {}
    for key, value in parse_qsl(search_query or ""):
        key, value = key.strip(), value.strip()
        if key and value:
            params[key] = value
    return params


def list_custom_object_instances(
    custom_object_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List the instances of a custom object (defaults: id,createdAt,updatedAt)."""
    try:
        custom_object_id = _validate_id(custom_object_id, "custom_object_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "list_resources",
        path=f"customObjects/{custom_object_id}/instances",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
    )


def search_custom_object_instances(
    custom_object_id: str, search_query: str, fields: str | None = None
) -> str:
    """Search custom object instances.

    Args:
        custom_object_id: The custom object id.
        search_query: Criteria as query parameters, e.g.
            'externalId=abc&customFieldId=f1&customFieldValue=x'. Supported keys
            include id, externalId, customerId, organizationId, customFieldId and
            customFieldValue.
        fields: Comma-separated. Defaults to id,createdAt,updatedAt.
    """
    try:
        custom_object_id = _validate_id(custom_object_id, "custom_object_id")
    except VitallyError as e:
        return _invalid(e)
    criteria = _parse_search_query(search_query)
    if not criteria:
        return _invalid(
            VitallyError(f"[ERROR] search_query has no key=value pairs: {search_query!r}")
        )
    return _run(
        "list_resources",
        path=f"customObjects/{custom_object_id}/instances/search",
        limit=MAX_LIST_LIMIT,
        extra_params=criteria,
        fields=fields,
    )


def create_custom_object_instance(custom_object_id: str, json_body: str) -> str:
    """Create an instance of a custom object."""
    try:
        custom_object_id = _validate_id(custom_object_id, "custom_object_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "create_resource", path=f"customObjects/{custom_object_id}/instances", body=json_body
    )


def update_custom_object_instance(custom_object_id: str, instance_id: str, json_body: str) -> str:
    """Update an instance of a custom object."""
    try:
        custom_object_id = _validate_id(custom_object_id, "custom_object_id")
        instance_id = _validate_id(instance_id, "instance_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "update_resource",
        path=f"customObjects/{custom_object_id}/instances",
        resource_id=instance_id,
        body=json_body,
    )


def delete_custom_object_instance(custom_object_id: str, instance_id: str) -> str:
    """Delete an instance of a custom object."""
    try:
        custom_object_id = _validate_id(custom_object_id, "custom_object_id")
        instance_id = _validate_id(instance_id, "instance_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "delete_resource",
        path=f"customObjects/{custom_object_id}/instances",
        resource_id=instance_id,
    )


def register(mcp):
    """Register all project and custom-object tools with the FastMCP instance."""
    mcp.tool()(list_projects)
    mcp.tool()(get_project)
    mcp.tool()(list_project_templates)
    mcp.tool()(get_project_template)
    mcp.tool()(list_project_categories)
    mcp.tool()(get_project_category)
    mcp.tool()(list_custom_objects)
    mcp.tool()(get_custom_object)
    mcp.tool()(create_custom_object)
    mcp.tool()(update_custom_object)
    mcp.tool()(list_custom_object_instances)
    mcp.tool()(search_custom_object_instances)
    mcp.tool()(create_custom_object_instance)
    mcp.tool()(update_custom_object_instance)
    mcp.tool()(delete_custom_object_instance)
