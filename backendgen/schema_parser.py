"""Build the schema registry from an OpenAPI document.

Handles:
- Primitive OpenAPI type -> Go type mapping
- components/schemas decoding (strict: a non-mapping block is fatal)
- Inline request/response body schema discovery (permissive: anything
  of the wrong shape is skipped)
- Deterministic naming of inline schemas from the operation identity
- Merging, where component schemas always win over inline ones
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .loader import (
    InvalidShapeError,
    get_components,
    get_mapping,
    get_paths,
    get_str,
    iter_operations,
)
from .naming import (
    derive_operation_id,
    normalize_identifier,
    request_schema_name,
    response_schema_name,
)

logger = logging.getLogger(__name__)

_GO_TYPES: dict[str, str] = {
    "string": "string",
    "integer": "int",
    "number": "float64",
    "boolean": "bool",
    "array": "[]interface{}",
    "object": "map[string]interface{}",
}

_ANY = "interface{}"

JSON_CONTENT_TYPE = "application/json"


def map_type(openapi_type: str | None) -> str:
    """Map an OpenAPI primitive type name to a Go type."""
    if openapi_type is None:
        return _ANY
    return _GO_TYPES.get(openapi_type, _ANY)


@dataclass(frozen=True)
class SchemaDef:
    """A decoded schema: its type, its properties, or a pointer elsewhere."""

    kind: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)
    reference: str | None = None

    @property
    def is_struct(self) -> bool:
        return self.kind == "object" and bool(self.properties)


def parse_schema_def(raw: dict[str, Any]) -> SchemaDef:
    """Decode one schema mapping into a SchemaDef."""
    ref = get_str(raw, "$ref")
    if ref is not None:
        # Siblings of $ref are ignored.
        return SchemaDef(reference=ref)
    return SchemaDef(
        kind=get_str(raw, "type"),
        properties=dict(get_mapping(raw, "properties") or {}),
    )


def schema_fields(schema: SchemaDef) -> list[dict[str, str]]:
    """Struct fields for a schema, in property declaration order."""
    if not schema.is_struct:
        return []
    fields = []
    for prop_name, prop_schema in schema.properties.items():
        fields.append({
            "name": normalize_identifier(prop_name),
            "type": map_type(get_str(prop_schema, "type")),
            "json": prop_name,
        })
    return fields


def json_body_schema(node: Any) -> dict[str, Any] | None:
    """Schema under ``content/application/json/schema``, if present."""
    return get_mapping(node, "content", JSON_CONTENT_TYPE, "schema")


def is_reference(schema: dict[str, Any]) -> bool:
    return get_str(schema, "$ref") is not None


def extract_named_schemas(components: dict[str, Any]) -> dict[str, SchemaDef]:
    """Decode every entry of components/schemas.

    Raises InvalidShapeError if ``schemas`` exists but is not a mapping,
    or if one of its entries is not a mapping.
    """
    if "schemas" not in components:
        return {}
    raw_schemas = components["schemas"]
    if not isinstance(raw_schemas, dict):
        raise InvalidShapeError(
            f"components.schemas must be a mapping, got {type(raw_schemas).__name__}"
        )

    schemas: dict[str, SchemaDef] = {}
    for name in sorted(raw_schemas):
        raw = raw_schemas[name]
        if not isinstance(raw, dict):
            raise InvalidShapeError(
                f"components.schemas.{name} must be a mapping, got {type(raw).__name__}"
            )
        schemas[name] = parse_schema_def(raw)
    return schemas


def extract_inline_schemas(paths: dict[str, Any]) -> dict[str, SchemaDef]:
    """Register every inline (non-$ref) JSON request and response schema.

    Names are <operationId>Request and <operationId>Response<status>.
    """
    schemas: dict[str, SchemaDef] = {}
    for path, method, operation in iter_operations(paths):
        operation_id = derive_operation_id(method, path, get_str(operation, "operationId"))

        body_schema = json_body_schema(get_mapping(operation, "requestBody"))
        if body_schema is not None and not is_reference(body_schema):
            schemas[request_schema_name(operation_id)] = parse_schema_def(body_schema)

        responses = get_mapping(operation, "responses") or {}
        for status in sorted(responses, key=str):
            resp_schema = json_body_schema(responses[status])
            if resp_schema is not None and not is_reference(resp_schema):
                name = response_schema_name(operation_id, str(status))
                schemas[name] = parse_schema_def(resp_schema)
    return schemas


def merge_schemas(
    named: dict[str, SchemaDef],
    inline: dict[str, SchemaDef],
) -> dict[str, SchemaDef]:
    """Union of both registries; a name in ``named`` is never overwritten."""
    merged = dict(named)
    for name, schema in inline.items():
        if name in merged:
            logger.debug("Inline schema %s shadowed by component schema", name)
            continue
        merged[name] = schema
    return merged


def build_registry(spec: dict[str, Any]) -> dict[str, SchemaDef]:
    """Full schema registry: component schemas first, then inline ones."""
    named = extract_named_schemas(get_components(spec))
    inline = extract_inline_schemas(get_paths(spec))
    registry = merge_schemas(named, inline)
    logger.debug(
        "Schema registry: %d named, %d inline, %d total",
        len(named), len(inline), len(registry),
    )
    return registry
