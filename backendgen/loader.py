"""Load an OpenAPI document and walk its paths.

Reads JSON or YAML from disk and offers small optional-extraction
helpers so that malformed fragments read as absent instead of raising.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator

import yaml

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


class InvalidShapeError(ValueError):
    """A document fragment that must be a mapping is something else."""


class _StringKeyLoader(yaml.SafeLoader):
    """SafeLoader that keeps scalar mapping keys as their source text.

    YAML 1.1 would otherwise turn keys like ``on``, ``no``, ``null`` or
    ``200`` into bools, None or ints. Values are resolved as usual.
    """

    def construct_mapping(self, node, deep=False):
        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                key = key_node.value
            else:
                key = self.construct_object(key_node, deep=deep)
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


def load_spec(path: Path) -> dict[str, Any]:
    """Load the OpenAPI document from disk."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in _YAML_SUFFIXES:
        doc = yaml.load(text, Loader=_StringKeyLoader)
    else:
        doc = json.loads(text)

    if not isinstance(doc, dict):
        raise InvalidShapeError(f"{path}: document root must be a mapping")
    logger.debug("Loaded %s (%d paths)", path, len(get_paths(doc)))
    return doc


def get_mapping(node: Any, *keys: str) -> dict[str, Any] | None:
    """Follow ``keys`` through nested mappings.

    Returns the mapping found at the end, or None if any step is missing
    or is not a mapping.
    """
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, dict):
        return node
    return None


def get_str(node: Any, key: str) -> str | None:
    """Return ``node[key]`` when node is a mapping and the value is a string."""
    if not isinstance(node, dict):
        return None
    value = node.get(key)
    if isinstance(value, str):
        return value
    return None


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the document."""
    return get_mapping(spec, "paths") or {}


def get_components(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract the components block from the document."""
    return get_mapping(spec, "components") or {}


def iter_operations(paths: dict[str, Any]) -> Iterator[tuple[str, str, dict[str, Any]]]:
    """Yield (path, method, operation) sorted by path, then method.

    Path items and operations that are not mappings (``parameters`` lists,
    ``summary`` strings, nulls) are skipped.
    """
    for path in sorted(paths):
        path_item = paths[path]
        if not isinstance(path_item, dict):
            continue
        for method in sorted(path_item):
            operation = path_item[method]
            if not isinstance(operation, dict):
                continue
            yield path, method, operation
