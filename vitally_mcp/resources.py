"""Resource registry — default field sets per Vitally resource type.

Standalone module (no project imports). Adding a resource type means
appending one ResourceDefinition to RESOURCES.
"""

from dataclasses import dataclass

MINIMAL_FIELDS: tuple[str, ...] = ("id", "createdAt", "updatedAt")


@dataclass(frozen=True)
class ResourceDefinition:
    """One Vitally resource collection (maps to /resources/<name>)."""

    name: str
    default_fields: tuple[str, ...]
    description: str


_NAMED = ("id", "name", "createdAt", "updatedAt")

RESOURCES: tuple[ResourceDefinition, ...] = (
    # Customers
    ResourceDefinition(
        "accounts",
        _NAMED
        + (
            "externalId",
            "organizationId",
            "healthScore",
            "mrr",
            "accountOwnerId",
            "lastSeenTimestamp",
        ),
        "Customer accounts",
    ),
    ResourceDefinition(
        "organizations",
        _NAMED + ("externalId", "healthScore", "mrr", "lastSeenTimestamp"),
        "Organisations grouping accounts",
    ),
    ResourceDefinition(
        "users",
        (
            "id",
            "name",
            "email",
            "createdAt",
            "updatedAt",
            "externalId",
            "accountId",
            "organizationId",
            "lastSeenTimestamp",
        ),
        "End users of customer accounts",
    ),
    ResourceDefinition(
        "admins", ("id", "name", "email", "createdAt", "updatedAt"), "Vitally workspace admins"
    ),
    # Engagement
    ResourceDefinition(
        "tasks",
        _NAMED
        + (
            "externalId",
            "dueDate",
            "completedAt",
            "assignedToId",
            "accountId",
            "organizationId",
        ),
        "CSM tasks",
    ),
    ResourceDefinition("taskCategories", _NAMED, "Task categories"),
    ResourceDefinition(
        "notes",
        (
            "id",
            "subject",
            "createdAt",
            "updatedAt",
            "externalId",
            "noteDate",
            "authorId",
            "accountId",
            "organizationId",
            "categoryId",
        ),
        "Notes logged against accounts or organisations",
    ),
    ResourceDefinition("noteCategories", _NAMED, "Note categories"),
    ResourceDefinition(
        "conversations",
        (
            "id",
            "externalId",
            "subject",
            "createdAt",
            "updatedAt",
            "accountId",
            "organizationId",
        ),
        "Email/chat conversations",
    ),
    ResourceDefinition(
        "messages",
        ("id", "type", "timestamp", "message", "from", "to"),
        "Messages inside a conversation",
    ),
    ResourceDefinition(
        "npsResponses",
        ("id", "externalId", "userId", "score", "respondedAt"),
        "NPS survey responses",
    ),
    # Projects
    ResourceDefinition(
        "projects",
        _NAMED + ("accountId", "organizationId", "archivedAt"),
        "Customer projects",
    ),
    ResourceDefinition("projectTemplates", _NAMED + ("projectCategoryId",), "Project templates"),
    ResourceDefinition("projectCategories", _NAMED, "Project categories"),
    ResourceDefinition("customObjects", _NAMED, "Custom object definitions"),
)


# -- Helpers --


def get_resource(name: str) -> ResourceDefinition:
    """Return a resource definition by name. Raises KeyError if not found."""
    for resource in RESOURCES:
        if resource.name == name:
            return resource
    raise KeyError(f"Unknown resource type: {name!r}")


def resource_names() -> tuple[str, ...]:
    """Return all resource type names in registration order."""
    return tuple(resource.name for resource in RESOURCES)


def default_fields(resource_type: str | None) -> tuple[str, ...]:
    """Return the default field set for a resource type (minimal set if unknown)."""
    if not resource_type:
        return MINIMAL_FIELDS
    try:
        return get_resource(resource_type).default_fields
    except KeyError:
        return MINIMAL_FIELDS


def resource_type_for_path(path: str) -> str:
    """Derive the default-field tag for an endpoint path.

    ``organizations/o1/accounts`` -> ``accounts``;
    ``customObjects/c1/instances/search`` -> ``instances``.
    Paths always end in a collection segment, optionally followed by ``search``.
    """
    segments = [s for s in path.strip("/").split("/") if s]
    if segments and segments[-1] == "search":
        segments.pop()
    return segments[-1] if segments else ""
