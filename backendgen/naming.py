"""Derive Go identifiers from schema names, operation ids and paths.

Identifier rule: drop '-' and ' ', then upper-case the first character
only. Internal words keep their case.

Operation identity:
  - operationId from the document, when present
  - otherwise METHOD + path with '/' removed

Examples:
  POST   /users           -> POSTusers          (entity prefix "Users:")
  GET    /users/{id}      -> GETusers{id}       (entity prefix "Users:")
  create-user (operationId) -> Createuser
  #/components/schemas/userProfile -> UserProfile
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

COMPONENT_REF_PREFIX = "#/components/schemas/"


def normalize_identifier(name: str) -> str:
    """Strip '-' and spaces and capitalize the first character.

    Not guaranteed to yield a valid Go identifier: a leading digit or
    a brace from a path template survives untouched.
    """
    name = name.replace("-", "").replace(" ", "")
    if not name:
        return name
    return name[0].upper() + name[1:]


def derive_operation_id(method: str, path: str, operation_id: str | None = None) -> str:
    """Return the document's operationId or METHOD + path without slashes."""
    if operation_id:
        return operation_id
    return method.upper() + path.replace("/", "")


def handler_name(operation_id: str) -> str:
    """Go method name for an operation's handler."""
    return normalize_identifier(operation_id)


def entity_name(path: str) -> str:
    """First non-empty path segment, normalized. Empty for '/'."""
    for segment in path.split("/"):
        if segment:
            return normalize_identifier(segment)
    return ""


def entity_prefix(path: str) -> str:
    """Key prefix grouping stored values of one entity, e.g. 'Users:'."""
    return f"{entity_name(path)}:"


def request_schema_name(operation_id: str) -> str:
    """Registry name for an operation's inline request body schema."""
    return f"{operation_id}Request"


def response_schema_name(operation_id: str, status: str) -> str:
    """Registry name for an operation's inline response schema."""
    return f"{operation_id}Response{status}"


def ref_to_type_name(ref: str) -> str:
    """Go type name for a ``$ref`` pointer.

    '#/components/schemas/<Name>' maps to normalize(Name). Any other
    pointer falls back to its last segment.
    """
    if ref.startswith(COMPONENT_REF_PREFIX):
        return normalize_identifier(ref[len(COMPONENT_REF_PREFIX):])
    logger.warning("Non-local schema reference %r, using its last segment", ref)
    return normalize_identifier(ref.rsplit("/", 1)[-1])
