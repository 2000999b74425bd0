"""Customer tools: accounts, organizations, users, admins (22 tools)."""

from __future__ import annotations

from typing import Literal

from vitally_mcp import VitallyError
from vitally_mcp.config import DEFAULT_LIST_LIMIT, VALID_ACCOUNT_STATUSES
from vitally_mcp.mcp_server._core import _invalid, _run, _validate_choice, _validate_id

SortField = Literal["createdAt", "updatedAt"]


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


def list_accounts(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    status: Literal["active", "churned", "activeOrChurned"] | None = None,
    traits: str | None = None,
) -> str:
    """List accounts with pagination, status filter and field selection.

    Args:
        limit: Max accounts per page (default 20, max 100).
        cursor: The 'next' value from the previous page.
        fields: Comma-separated fields, e.g. 'id,name,mrr'. Defaults to
            id,name,createdAt,updatedAt,externalId,organizationId,healthScore,mrr,
            accountOwnerId,lastSeenTimestamp.
        sort_by: 'createdAt' or 'updatedAt' (upstream default: updatedAt).
        status: 'active' (upstream default), 'churned' or 'activeOrChurned'.
        traits: Comma-separated trait names; requires 'traits' in fields.

    Returns:
        JSON string with results (list) and next (cursor, when more pages exist).
    """
    try:
        status = _validate_choice(status, VALID_ACCOUNT_STATUSES, "status")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "list_resources",
        path="accounts",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        extra_params={"status": status},
        fields=fields,
        traits=traits,
    )


def list_accounts_by_organization(
    organization_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List the accounts belonging to one organization."""
    try:
        organization_id = _validate_id(organization_id, "organization_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "list_resources",
        path=f"organizations/{organization_id}/accounts",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
        traits=traits,
    )


def get_account(account_id: str, fields: str | None = None, traits: str | None = None) -> str:
    """Get one account by id. Same field/trait selection as list_accounts."""
    try:
        account_id = _validate_id(account_id, "account_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "get_resource", path="accounts", resource_id=account_id, fields=fields, traits=traits
    )


def get_account_health_scores(
    account_id: str, limit: int = DEFAULT_LIST_LIMIT, fields: str | None = None
) -> str:
    """Get the health score breakdown of an account.

    Health scores have no default field set, so without ``fields`` only
    id, createdAt and updatedAt come back. Pass ``fields`` (for example
    "id,name,score,weight") to see the score values.
    """
    try:
        account_id = _validate_id(account_id, "account_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "list_resources",
        path=f"accounts/{account_id}/healthScores",
        limit=limit,
        fields=fields,
    )


def create_account(json_body: str) -> str:
    """Create an account.

    Args:
        json_body: JSON object, e.g. {"externalId": "...", "name": "...", "traits": {}}.
            'externalId' and 'name' are required by Vitally.
    """
    return _run("create_resource", path="accounts", body=json_body)


def update_account(account_id: str, json_body: str) -> str:
    """Update an account. json_body holds only the fields to change."""
    try:
        account_id = _validate_id(account_id, "account_id")
    except VitallyError as e:
        return _invalid(e)
    return _run("update_resource", path="accounts", resource_id=account_id, body=json_body)


def delete_account(account_id: str) -> str:
    """Delete an account."""
    try:
        account_id = _validate_id(account_id, "account_id")
    except VitallyError as e:
        return _invalid(e)
    return _run("delete_resource", path="accounts", resource_id=account_id)


# ---------------------------------------------------------------------------
# Organizations
# ---------------------------------------------------------------------------


def list_organizations(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List organizations.

    Args:
        fields: Comma-separated. Defaults to id,name,createdAt,updatedAt,externalId,
            healthScore,mrr,lastSeenTimestamp.
        traits: Comma-separated trait names; requires 'traits' in fields.
    """
    return _run(
        "list_resources",
        path="organizations",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
        traits=traits,
    )


def get_organization(
    organization_id: str, fields: str | None = None, traits: str | None = None
) -> str:
    """Get one organization by id."""
    try:
        organization_id = _validate_id(organization_id, "organization_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "get_resource",
        path="organizations",
        resource_id=organization_id,
        fields=fields,
        traits=traits,
    )


def create_organization(json_body: str) -> str:
    """Create an organization ('externalId' and 'name' required)."""
    return _run("create_resource", path="organizations", body=json_body)


def update_organization(organization_id: str, json_body: str) -> str:
    """Update an organization."""
    try:
        organization_id = _validate_id(organization_id, "organization_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "update_resource", path="organizations", resource_id=organization_id, body=json_body
    )


def delete_organization(organization_id: str) -> str:
    """Delete an organization."""
    try:
        organization_id = _validate_id(organization_id, "organization_id")
    except VitallyError as e:
        return _invalid(e)
    return _run("delete_resource", path="organizations", resource_id=organization_id)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def list_users(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List users.

    Args:
        fields: Comma-separated. Defaults to id,name,email,createdAt,updatedAt,
            externalId,accountId,organizationId,lastSeenTimestamp.
        traits: Comma-separated trait names; requires 'traits' in fields.
    """
    return _run(
        "list_resources",
        path="users",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
        traits=traits,
    )


def list_users_by_account(
    account_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List the users of one account."""
    try:
        account_id = _validate_id(account_id, "account_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "list_resources",
        path=f"accounts/{account_id}/users",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
        traits=traits,
    )


def list_users_by_organization(
    organization_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List the users of one organization."""
    try:
        organization_id = _validate_id(organization_id, "organization_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "list_resources",
        path=f"organizations/{organization_id}/users",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
        traits=traits,
    )


def search_users(
    email: str | None = None,
    external_id: str | None = None,
    email_subdomain: str | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
    fields: str | None = None,
) -> str:
    """Search users by email, externalId or email subdomain. At least one is required."""
    if not any((email, external_id, email_subdomain)):
        return _invalid(
            VitallyError("[ERROR] Provide at least one of email, external_id, email_subdomain.")
        )
    return _run(
        "list_resources",
        path="users/search",
        limit=limit,
        extra_params={
            "email": email,
            "externalId": external_id,
            "emailSubdomain": email_subdomain,
        },
        fields=fields,
    )


def get_user(user_id: str, fields: str | None = None, traits: str | None = None) -> str:
    """Get one user by id."""
    try:
        user_id = _validate_id(user_id, "user_id")
    except VitallyError as e:
        return _invalid(e)
    return _run("get_resource", path="users", resource_id=user_id, fields=fields, traits=traits)


def create_user(json_body: str) -> str:
    """Create a user.

    Args:
        json_body: JSON object. 'externalId' plus 'accountIds' or 'organizationIds'
            are required by Vitally; 'name', 'email' and 'traits' are optional.
    """
    return _run("create_resource", path="users", body=json_body)


def update_user(user_id: str, json_body: str) -> str:
    """Update a user."""
    try:
        user_id = _validate_id(user_id, "user_id")
    except VitallyError as e:
        return _invalid(e)
    return _run("update_resource", path="users", resource_id=user_id, body=json_body)


def delete_user(user_id: str) -> str:
    """Delete a user."""
    try:
        user_id = _validate_id(user_id, "user_id")
    except VitallyError as e:
        return _invalid(e)
    return _run("delete_resource", path="users", resource_id=user_id)


# ---------------------------------------------------------------------------
# Admins
# ---------------------------------------------------------------------------


def list_admins(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List workspace admins (defaults: id,name,email,createdAt,updatedAt)."""
    return _run(
        "list_resources",
        path="admins",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
    )


def get_admin(admin_id: str, fields: str | None = None) -> str:
    """Get one admin by id."""
    try:
        admin_id = _validate_id(admin_id, "admin_id")
    except VitallyError as e:
        return _invalid(e)
    return _run("get_resource", path="admins", resource_id=admin_id, fields=fields)


def register(mcp):
    """Register all customer tools with the FastMCP instance."""
    mcp.tool()(list_accounts)
    mcp.tool()(list_accounts_by_organization)
    mcp.tool()(get_account)
    mcp.tool()(get_account_health_scores)
    mcp.tool()(create_account)
    mcp.tool()(update_account)
    mcp.tool()(delete_account)
    mcp.tool()(list_organizations)
    mcp.tool()(get_organization)
    mcp.tool()(create_organization)
    mcp.tool()(update_organization)
    mcp.tool()(delete_organization)
    mcp.tool()(list_users)
    mcp.tool()(list_users_by_account)
    mcp.tool()(list_users_by_organization)
    mcp.tool()(search_users)
    mcp.tool()(get_user)
    mcp.tool()(create_user)
    mcp.tool()(update_user)
    mcp.tool()(delete_user)
    mcp.tool()(list_admins)
    mcp.tool()(get_admin)
