"""MCP server exposing VitallyClient resources as tools.

Package structure:
  __init__.py          — FastMCP init, register() calls, re-exports
  __main__.py          — ``python -m vitally_mcp.mcp_server`` entry point
  _core.py             — Client caching, _call dispatcher, response contract, id validation
  _tools_customers.py  — 22 account/organization/user/admin tools
  _tools_engagement.py — 34 task/note/conversation/message/NPS tools
  _tools_projects.py   — 15 project/template/category/custom-object tools

Run: python -m vitally_mcp.mcp_server
Requires: VITALLY_API_KEY and VITALLY_SUBDOMAIN (env or .env)
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from vitally_mcp.mcp_server import _tools_customers, _tools_engagement, _tools_projects

mcp = FastMCP(
    "vitally",
    instructions=(
        "Vitally customer-success tools. "
        "List and get tools return only a default field set per resource; "
        "pass fields='id,name,...' to choose fields and traits='a,b' "
        "(with 'traits' in fields) to narrow custom traits.\n"
        "Pagination: pass the 'next' value of a page as cursor for the next page. "
        "Write tools take json_body as a JSON object string and return the "
        "upstream response unfiltered.\n"
        "Errors come back as {ok: false, type, error}; type 'setup' means the "
        "API key or subdomain is wrong."
    ),
)

for _mod in [_tools_customers, _tools_engagement, _tools_projects]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

# _core
from vitally_mcp.mcp_server._core import (  # noqa: E402, F401
    _call,
    _contract_error,
    _finalize_tool_result,
    _get_client,
    _validate_choice,
    _validate_id,
)

# _tools_customers
from vitally_mcp.mcp_server._tools_customers import (  # noqa: E402, F401
    create_account,
    create_organization,
    create_user,
    delete_account,
    delete_organization,
    delete_user,
    get_account,
    get_account_health_scores,
    get_admin,
    get_organization,
    get_user,
    list_accounts,
    list_accounts_by_organization,
    list_admins,
    list_organizations,
    list_users,
    list_users_by_account,
    list_users_by_organization,
    search_users,
    update_account,
    update_organization,
    update_user,
)

# _tools_engagement
from vitally_mcp.mcp_server._tools_engagement import (  # noqa: E402, F401
    create_conversation,
    create_message,
    create_note,
    create_nps_response,
    create_task,
    delete_conversation,
    delete_message,
    delete_note,
    delete_nps_response,
    delete_task,
    get_conversation,
    get_message,
    get_note,
    get_nps_response,
    get_task,
    list_conversations,
    list_conversations_by_account,
    list_conversations_by_organization,
    list_messages_by_conversation,
    list_note_categories,
    list_notes,
    list_notes_by_account,
    list_notes_by_organization,
    list_nps_responses,
    list_nps_responses_by_account,
    list_nps_responses_by_organization,
    list_task_categories,
    list_tasks,
    list_tasks_by_account,
    list_tasks_by_organization,
    update_conversation,
    update_note,
    update_nps_response,
    update_task,
)

# _tools_projects
from vitally_mcp.mcp_server._tools_projects import (  # noqa: E402, F401
    create_custom_object,
    create_custom_object_instance,
    delete_custom_object_instance,
    get_custom_object,
    get_project,
    get_project_category,
    get_project_template,
    list_custom_object_instances,
    list_custom_objects,
    list_project_categories,
    list_project_templates,
    list_projects,
    search_custom_object_instances,
    update_custom_object,
    update_custom_object_instance,
)


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()
