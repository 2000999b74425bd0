"""Engagement tools: tasks, notes, conversations, messages, NPS responses (34 tools)."""

from __future__ import annotations

from typing import Literal

from vitally_mcp import VitallyError
from vitally_mcp.config import DEFAULT_LIST_LIMIT, VALID_NPS_TARGETS
from vitally_mcp.mcp_server._core import _invalid, _run, _validate_choice, _validate_id

SortField = Literal["createdAt", "updatedAt"]


def _list_scoped(scope, scope_id, collection, scope_field, **kwargs):
    """List ``collection`` under ``accounts/<id>`` or ``organizations/<id>``."""
    try:
        scope_id = _validate_id(scope_id, scope_field)
    except VitallyError as e:
        return _invalid(e)
    return _run("list_resources", path=f"{scope}/{scope_id}/{collection}", **kwargs)


def _get(path, resource_id, field, **kwargs):
    try:
        resource_id = _validate_id(resource_id, field)
    except VitallyError as e:
        return _invalid(e)
    return _run("get_resource", path=path, resource_id=resource_id, **kwargs)


def _update(path, resource_id, field, json_body):
    try:
        resource_id = _validate_id(resource_id, field)
    except VitallyError as e:
        return _invalid(e)
    return _run("update_resource", path=path, resource_id=resource_id, body=json_body)


def _delete(path, resource_id, field):
    try:
        resource_id = _validate_id(resource_id, field)
    except VitallyError as e:
        return _invalid(e)
    return _run("delete_resource", path=path, resource_id=resource_id)


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


def list_tasks(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List tasks.

    Args:
        limit: Max tasks per page (default 20, max 100).
        cursor: The 'next' value from the previous page.
        fields: Comma-separated. Defaults to id,name,createdAt,updatedAt,externalId,
            dueDate,completedAt,assignedToId,accountId,organizationId.
        traits: Comma-separated trait names; requires 'traits' in fields.
    """
    return _run(
        "list_resources",
        path="tasks",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
        traits=traits,
    )


def list_tasks_by_account(
    account_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List the tasks of one account."""
    return _list_scoped(
        "accounts", account_id, "tasks", "account_id",
        limit=limit, cursor=cursor, sort_by=sort_by, fields=fields, traits=traits,
    )


def list_tasks_by_organization(
    organization_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List the tasks of one organization."""
    return _list_scoped(
        "organizations", organization_id, "tasks", "organization_id",
        limit=limit, cursor=cursor, sort_by=sort_by, fields=fields, traits=traits,
    )


def list_task_categories(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List task categories (defaults: id,name,createdAt,updatedAt)."""
    return _run(
        "list_resources",
        path="taskCategories",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
    )


def get_task(task_id: str, fields: str | None = None, traits: str | None = None) -> str:
    """Get one task by id."""
    return _get("tasks", task_id, "task_id", fields=fields, traits=traits)


def create_task(json_body: str) -> str:
    """Create a task.

    Args:
        json_body: JSON object. 'name' plus 'accountId' or 'organizationId' are
            required by Vitally; 'externalId', 'dueDate', 'assignedToId',
            'categoryId' and 'traits' are optional.
    """
    return _run("create_resource", path="tasks", body=json_body)


def update_task(task_id: str, json_body: str) -> str:
    """Update a task. Set 'completedAt' to close it."""
    return _update("tasks", task_id, "task_id", json_body)


def delete_task(task_id: str) -> str:
    """Delete a task."""
    return _delete("tasks", task_id, "task_id")


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


def list_notes(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List notes.

    Args:
        fields: Comma-separated. Defaults to id,subject,createdAt,updatedAt,
            externalId,noteDate,authorId,accountId,organizationId,categoryId.
            Add 'note' for the body.
        traits: Comma-separated trait names; requires 'traits' in fields.
    """
    return _run(
        "list_resources",
        path="notes",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
        traits=traits,
    )


def list_notes_by_account(
    account_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List the notes of one account."""
    return _list_scoped(
        "accounts", account_id, "notes", "account_id",
        limit=limit, cursor=cursor, sort_by=sort_by, fields=fields, traits=traits,
    )


def list_notes_by_organization(
    organization_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    traits: str | None = None,
) -> str:
    """List the notes of one organization."""
    return _list_scoped(
        "organizations", organization_id, "notes", "organization_id",
        limit=limit, cursor=cursor, sort_by=sort_by, fields=fields, traits=traits,
    )


def list_note_categories(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List note categories."""
    return _run(
        "list_resources",
        path="noteCategories",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
    )


def get_note(note_id: str, fields: str | None = None, traits: str | None = None) -> str:
    """Get one note by id."""
    return _get("notes", note_id, "note_id", fields=fields, traits=traits)


def create_note(json_body: str) -> str:
    """Create a note ('note', 'noteDate' and 'accountId' or 'organizationId' required)."""
    return _run("create_resource", path="notes", body=json_body)


def update_note(note_id: str, json_body: str) -> str:
    """Update a note."""
    return _update("notes", note_id, "note_id", json_body)


def delete_note(note_id: str) -> str:
    """Delete a note."""
    return _delete("notes", note_id, "note_id")


# ---------------------------------------------------------------------------
# Conversations
# ---------------------------------------------------------------------------


def list_conversations(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List conversations.

    Args:
        fields: Comma-separated. Defaults to id,externalId,subject,createdAt,
            updatedAt,accountId,organizationId.
    """
    return _run(
        "list_resources",
        path="conversations",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
    )


def list_conversations_by_account(
    account_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List the conversations of one account."""
    return _list_scoped(
        "accounts", account_id, "conversations", "account_id",
        limit=limit, cursor=cursor, sort_by=sort_by, fields=fields,
    )


def list_conversations_by_organization(
    organization_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List the conversations of one organization."""
    return _list_scoped(
        "organizations", organization_id, "conversations", "organization_id",
        limit=limit, cursor=cursor, sort_by=sort_by, fields=fields,
    )


def get_conversation(conversation_id: str, fields: str | None = None) -> str:
    """Get one conversation by id."""
    return _get("conversations", conversation_id, "conversation_id", fields=fields)


def create_conversation(json_body: str) -> str:
    """Create a conversation with its messages.

    Args:
        json_body: JSON object with 'externalId', 'subject' and 'messages' (array).
            'traits' is optional.
    """
    return _run("create_resource", path="conversations", body=json_body)


def update_conversation(conversation_id: str, json_body: str) -> str:
    """Update a conversation and its messages ('subject' and 'messages' required)."""
    return _update("conversations", conversation_id, "conversation_id", json_body)


def delete_conversation(conversation_id: str) -> str:
    """Delete a conversation including all of its messages."""
    return _delete("conversations", conversation_id, "conversation_id")


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


def list_messages_by_conversation(
    conversation_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List the messages of one conversation.

    Args:
        fields: Comma-separated. Defaults to id,type,timestamp,message,from,to.
    """
    try:
        conversation_id = _validate_id(conversation_id, "conversation_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "list_resources",
        path=f"conversations/{conversation_id}/messages",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        fields=fields,
    )


def get_message(message_id: str, fields: str | None = None) -> str:
    """Get one message by id."""
    return _get("messages", message_id, "message_id", fields=fields)


def create_message(conversation_id: str, json_body: str) -> str:
    """Add a message to a conversation.

    Args:
        json_body: JSON object with 'externalId', 'type' ('inbound'/'outbound'),
            'timestamp', 'message', 'from' and 'to'.
    """
    try:
        conversation_id = _validate_id(conversation_id, "conversation_id")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "create_resource", path=f"conversations/{conversation_id}/messages", body=json_body
    )


def delete_message(message_id: str) -> str:
    """Delete a message."""
    return _delete("messages", message_id, "message_id")


# ---------------------------------------------------------------------------
# NPS responses
# ---------------------------------------------------------------------------


def list_nps_responses(
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
    target: Literal["accounts", "organization"] | None = None,
) -> str:
    """List NPS responses.

    Args:
        fields: Comma-separated. Defaults to id,externalId,userId,score,respondedAt.
        target: 'accounts' (upstream default) or 'organization'.
    """
    try:
        target = _validate_choice(target, VALID_NPS_TARGETS, "target")
    except VitallyError as e:
        return _invalid(e)
    return _run(
        "list_resources",
        path="npsResponses",
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        extra_params={"target": target},
        fields=fields,
    )


def list_nps_responses_by_account(
    account_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List the NPS responses of one account."""
    return _list_scoped(
        "accounts", account_id, "npsResponses", "account_id",
        limit=limit, cursor=cursor, sort_by=sort_by, fields=fields,
    )


def list_nps_responses_by_organization(
    organization_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
    cursor: str | None = None,
    fields: str | None = None,
    sort_by: SortField | None = None,
) -> str:
    """List the NPS responses of one organization."""
    return _list_scoped(
        "organizations", organization_id, "npsResponses", "organization_id",
        limit=limit, cursor=cursor, sort_by=sort_by, fields=fields,
    )


def get_nps_response(nps_response_id: str, fields: str | None = None) -> str:
    """Get one NPS response by id."""
    return _get("npsResponses", nps_response_id, "nps_response_id", fields=fields)


def create_nps_response(json_body: str) -> str:
    """Create an NPS response ('userId', 'score' and 'respondedAt' required)."""
    return _run("create_resource", path="npsResponses", body=json_body)


def update_nps_response(nps_response_id: str, json_body: str) -> str:
    """Update an NPS response."""
    return _update("npsResponses", nps_response_id, "nps_response_id", json_body)


def delete_nps_response(nps_response_id: str) -> str:
    """Delete an NPS response."""
    return _delete("npsResponses", nps_response_id, "nps_response_id")


def register(mcp):
    """Register all engagement tools with the FastMCP instance."""
    mcp.tool()(list_tasks)
    mcp.tool()(list_tasks_by_account)
    mcp.tool()(list_tasks_by_organization)
    mcp.tool()(list_task_categories)
    mcp.tool()(get_task)
    mcp.tool()(create_task)
    mcp.tool()(update_task)
    mcp.tool()(delete_task)
    mcp.tool()(list_notes)
    mcp.tool()(list_notes_by_account)
    mcp.tool()(list_notes_by_organization)
    mcp.tool()(list_note_categories)
    mcp.tool()(get_note)
    mcp.tool()(create_note)
    mcp.tool()(update_note)
    mcp.tool()(delete_note)
    mcp.tool()(list_conversations)
    mcp.tool()(list_conversations_by_account)
    mcp.tool()(list_conversations_by_organization)
    mcp.tool()(get_conversation)
    mcp.tool()(create_conversation)
    mcp.tool()(update_conversation)
    mcp.tool()(delete_conversation)
    mcp.tool()(list_messages_by_conversation)
    mcp.tool()(get_message)
    mcp.tool()(create_message)
    mcp.tool()(delete_message)
    mcp.tool()(list_nps_responses)
    mcp.tool()(list_nps_responses_by_account)
    mcp.tool()(list_nps_responses_by_organization)
    mcp.tool()(get_nps_response)
    mcp.tool()(create_nps_response)
    mcp.tool()(update_nps_response)
    mcp.tool()(delete_nps_response)
