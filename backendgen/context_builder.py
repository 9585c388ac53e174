"""Build Jinja2 template context from a parsed OpenAPI document.

Extracts one OperationDescriptor per (path, method), decides the shape
of each handler, and assembles the context shared by every template.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .config import BADGER_MODULE, Settings
from .loader import get_mapping, get_paths, get_str, iter_operations
from .naming import (
    derive_operation_id,
    entity_prefix,
    handler_name,
    normalize_identifier,
    ref_to_type_name,
    request_schema_name,
    response_schema_name,
)
from .schema_parser import SchemaDef, build_registry, json_body_schema, schema_fields

logger = logging.getLogger(__name__)

# Verbs with a persistence-backed handler; anything else answers 405.
_HANDLED_METHODS = {"get", "post", "put", "delete"}

# Verbs whose handler reads the entity id from the request.
_ID_METHODS = {"get", "put", "delete"}

# Decode target when an operation declares no JSON request schema.
_GENERIC_BODY_TYPE = "map[string]interface{}"

SUCCESS_STATUS = "200"


@dataclass(frozen=True)
class OperationDescriptor:
    path: str
    method: str
    operation_id: str
    request_schema_ref: str | None = None
    response_schema_refs: dict[str, str | None] = field(default_factory=dict)

    @property
    def handler_name(self) -> str:
        return handler_name(self.operation_id)


def _resolve_type(schema: dict[str, Any] | None, placeholder: str) -> str | None:
    """Go type for a body schema slot.

    A $ref resolves to the referenced name; an inline schema to the
    placeholder it was registered under; no schema to None.
    """
    if schema is None:
        return None
    ref = get_str(schema, "$ref")
    if ref is not None:
        return ref_to_type_name(ref)
    return normalize_identifier(placeholder)


def describe_operation(path: str, method: str, operation: dict[str, Any]) -> OperationDescriptor:
    """Derive the identity and schema references of one operation."""
    operation_id = derive_operation_id(method, path, get_str(operation, "operationId"))

    request_ref = _resolve_type(
        json_body_schema(get_mapping(operation, "requestBody")),
        request_schema_name(operation_id),
    )

    response_refs: dict[str, str | None] = {}
    responses = get_mapping(operation, "responses") or {}
    for status in sorted(responses, key=str):
        response_refs[str(status)] = _resolve_type(
            json_body_schema(responses[status]),
            response_schema_name(operation_id, str(status)),
        )

    return OperationDescriptor(
        path=path,
        method=method,
        operation_id=operation_id,
        request_schema_ref=request_ref,
        response_schema_refs=response_refs,
    )


def extract_operations(spec: dict[str, Any]) -> list[OperationDescriptor]:
    """One descriptor per operation, sorted by path then method."""
    return [
        describe_operation(path, method, operation)
        for path, method, operation in iter_operations(get_paths(spec))
    ]


def build_handler(descriptor: OperationDescriptor) -> dict[str, Any]:
    """Template data for one handler and its route registration."""
    method = descriptor.method.lower()
    kind = method if method in _HANDLED_METHODS else "not_allowed"

    # PUT and DELETE always answer with a plain confirmation.
    response_type = None
    if kind in ("get", "post"):
        response_type = descriptor.response_schema_refs.get(SUCCESS_STATUS)

    return {
        "name": descriptor.handler_name,
        "operation_id": descriptor.operation_id,
        "method": descriptor.method.upper(),
        "path": descriptor.path,
        "pattern": f"{descriptor.method.upper()} {descriptor.path}",
        "kind": kind,
        "entity_prefix": entity_prefix(descriptor.path),
        "request_type": descriptor.request_schema_ref or _GENERIC_BODY_TYPE,
        "response_type": response_type,
    }


def handler_imports(handlers: list[dict[str, Any]]) -> list[str]:
    """Standard library imports needed by handlers.go."""
    kinds = {h["kind"] for h in handlers}
    imports: set[str] = set()
    if handlers:
        imports.add("net/http")
    if kinds & _ID_METHODS:
        imports.add("strings")
    if kinds & {"post", "put"} or any(
        h["kind"] == "get" and h["response_type"] for h in handlers
    ):
        imports.add("encoding/json")
    if kinds & {"post", "put", "delete"}:
        imports.add("fmt")
    if "post" in kinds:
        imports.add("time")
    return sorted(imports)


def build_models(registry: dict[str, SchemaDef]) -> list[dict[str, Any]]:
    """One struct per registry entry, in registry order."""
    models = []
    seen: dict[str, str] = {}
    for name, schema in registry.items():
        struct_name = normalize_identifier(name)
        if struct_name in seen:
            logger.warning(
                "Schemas %r and %r both map to struct %s", seen[struct_name], name, struct_name,
            )
        seen[struct_name] = name
        models.append({
            "name": struct_name,
            "source": name,
            "fields": schema_fields(schema),
            "reference": ref_to_type_name(schema.reference) if schema.reference else None,
        })
    return models


def _warn_duplicate_handlers(handlers: list[dict[str, Any]]) -> None:
    seen: dict[str, str] = {}
    for handler in handlers:
        route = handler["pattern"]
        if handler["name"] in seen:
            logger.warning(
                "Handler %s generated for both %s and %s", handler["name"], seen[handler["name"]], route,
            )
        else:
            seen[handler["name"]] = route


def build_context(spec: dict[str, Any], settings: Settings | None = None) -> dict[str, Any]:
    """Build the full template context from the OpenAPI document."""
    settings = settings or Settings()
    registry = build_registry(spec)
    descriptors = extract_operations(spec)

    handlers = [build_handler(d) for d in descriptors]
    _warn_duplicate_handlers(handlers)
    for handler in handlers:
        logger.debug("%s -> %s (%s)", handler["pattern"], handler["name"], handler["kind"])

    info = get_mapping(spec, "info") or {}

    return {
        "models": build_models(registry),
        "handlers": handlers,
        "handler_imports": handler_imports(handlers),
        "namespaces": [name.lower() for name in registry],
        "operation_count": len(handlers),
        "schema_count": len(registry),
        "api_title": get_str(info, "title") or "API",
        "api_version": get_str(info, "version") or "unknown",
        "module_name": settings.module_name,
        "go_version": settings.go_version,
        "badger_module": BADGER_MODULE,
        "badger_version": settings.badger_version,
        "listen_addr": settings.listen_addr,
        "db_path": settings.db_path,
    }
