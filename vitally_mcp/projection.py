"""
Client-side field and trait projection for Vitally responses.

Vitally's REST API returns every field of a resource; the MCP tools trim
responses down to the fields an agent asked for (or a per-resource default
set) before handing them back. Projection is a pure function of its inputs.

Presence, not truthiness, decides whether a key is copied: an explicit
``null`` in the source survives, a missing key never appears in the output.
"""

from __future__ import annotations

import copy
import json
from typing import Any

from vitally_mcp.exceptions import ParseError
from vitally_mcp.resources import default_fields

TRAITS_FIELD = "traits"
RESULTS_KEY = "results"
NEXT_KEY = "next"


def parse_document(raw: str | bytes | bytearray) -> Any:
    """Parse a raw JSON document. Raises ParseError on malformed input."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"[ERROR] Response is not valid UTF-8: {e.reason}") from None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"[ERROR] Invalid JSON in response: {e.msg} at position {e.pos}"
        ) from None


def parse_selector(value: str | list[str] | tuple[str, ...] | None) -> list[str] | None:
    """Normalize a comma-separated selector string (or list) into a list of names.

    Blank entries are dropped. Returns None when nothing remains.
    """
    if value is None:
        return None
    if isinstance(value, str):
        names = [v.strip() for v in value.split(",")]
    else:
        names = [str(v).strip() for v in value]
    names = [n for n in names if n]
    return names or None


def _narrow_traits(traits: dict, trait_names: list[str]) -> dict:
    return {name: copy.deepcopy(traits[name]) for name in trait_names if name in traits}


def project_object(
    obj: dict, fields: list[str] | tuple[str, ...], traits: list[str] | None = None
) -> dict:
    """Copy only the selected keys of *obj*, in selector order.

    When ``traits`` is selected, a trait selector is given (even an empty one)
    and the source value is an object, that object is narrowed to the named
    trait keys.
    """
    out: dict = {}
    for name in fields:
        if name not in obj or name in out:
            continue
        value = obj[name]
        if name == TRAITS_FIELD and traits is not None and isinstance(value, dict):
            out[name] = _narrow_traits(value, traits)
        else:
            out[name] = copy.deepcopy(value)
    return out


def _project_item(item: Any, fields, traits) -> Any:
    if isinstance(item, dict):
        return project_object(item, fields, traits)
    return copy.deepcopy(item)


def project(
    document: Any,
    fields: list[str] | tuple[str, ...] | None = None,
    resource_type: str | None = None,
    is_list: bool = False,
    traits: list[str] | None = None,
) -> Any:
    """Project a Vitally response document onto a field selection.

    Args:
        document: Parsed JSON value, or raw JSON text (str/bytes).
        fields: Field names to keep. None/empty uses the resource defaults.
        resource_type: Tag used to look up default fields (unknown -> minimal set).
        is_list: True for ``{"results": [...], "next": ...}`` list responses.
        traits: Trait names to keep inside ``traits`` when that field is selected.

    Returns:
        A new JSON value; the input is never mutated.
    """
    if isinstance(document, (str, bytes, bytearray)):
        document = parse_document(document)
    active = list(fields) if fields else list(default_fields(resource_type))
    trait_names = list(traits) if traits is not None else None

    if not is_list:
        if isinstance(document, list):
            return [_project_item(item, active, trait_names) for item in document]
        return _project_item(document, active, trait_names)

    if isinstance(document, list):
        return [_project_item(item, active, trait_names) for item in document]
    if not isinstance(document, dict):
        return copy.deepcopy(document)

    out: dict = {}
    if RESULTS_KEY in document:
        results = document[RESULTS_KEY]
        if isinstance(results, list):
            out[RESULTS_KEY] = [_project_item(item, active, trait_names) for item in results]
        else:
            out[RESULTS_KEY] = copy.deepcopy(results)
    if NEXT_KEY in document:
        out[NEXT_KEY] = copy.deepcopy(document[NEXT_KEY])
    return out


def project_json(
    raw: str | bytes,
    fields=None,
    resource_type: str | None = None,
    is_list: bool = False,
    traits=None,
) -> str:
    """Parse *raw*, project it and serialize the result back to JSON text."""
    projected = project(
        parse_document(raw),
        parse_selector(fields),
        resource_type,
        is_list,
        parse_selector(traits),
    )
    return json.dumps(projected, ensure_ascii=False)
