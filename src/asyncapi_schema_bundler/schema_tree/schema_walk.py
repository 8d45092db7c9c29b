"""Schema-aware traversal of JSON Schema trees."""

from __future__ import annotations

from collections.abc import Iterator, MutableMapping
from typing import Any

SchemaNode = MutableMapping[str, Any]

# Keywords holding instance data, never subschemas.
_INSTANCE_DATA_KEYWORDS = frozenset({"enum", "const", "default", "examples", "example"})

# Keywords holding a name -> subschema mapping.
_SCHEMA_MAP_KEYWORDS = frozenset(
    {"properties", "patternProperties", "definitions", "$defs", "dependencies"}
)


def iter_schema_nodes(root: Any) -> Iterator[SchemaNode]:
    """Yield every schema object below ``root`` depth-first, each exactly once.

    A node is yielded before its children are enumerated, so a consumer may
    edit the node's own fields (e.g. delete ``$id`` or replace ``$ref``) while
    iterating. Adding or removing subschemas during the walk is not supported.
    """
    stack: list[Any] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, list):
            stack.extend(reversed(node))
            continue
        if not isinstance(node, MutableMapping):
            continue
        yield node
        stack.extend(reversed(list(iter_subschemas(node))))


def iter_subschemas(node: SchemaNode) -> Iterator[Any]:
    """Yield the direct child values of ``node`` that may contain subschemas."""
    for keyword, value in list(node.items()):
        if keyword in _INSTANCE_DATA_KEYWORDS:
            continue
        if keyword in _SCHEMA_MAP_KEYWORDS and isinstance(value, MutableMapping):
            yield from value.values()
        elif isinstance(value, (MutableMapping, list)):
            yield value
