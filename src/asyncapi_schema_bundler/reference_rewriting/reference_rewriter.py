"""Identifier stripping and local reference rewriting for bundled schemas."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any
from urllib.parse import urldefrag

from asyncapi_schema_bundler.schema_tree import SchemaNode, iter_schema_nodes

from .identifier_classifier import classify_identifier

LOCAL_POINTER_SIGIL = "#"
DEFINITIONS_POINTER = "#/definitions/"

logger = logging.getLogger(__name__)


class DefinitionNameCollisionError(Exception):
    """Raised when two identifiers map to the same canonical definition name."""


def strip_identifiers(schema: SchemaNode) -> SchemaNode:
    """Rename definitions and rewrite every reference into a local pointer.

    Mutates ``schema`` in place and returns it. Definition keys are renamed
    before any reference is touched so that sibling definitions referencing
    each other by absolute identifier resolve under the new names.
    """
    rename_definitions(schema)
    rewrite_references(schema)
    return schema


def rename_definitions(schema: SchemaNode) -> dict[str, str]:
    """Re-key ``schema["definitions"]`` by canonical name, preserving order.

    Returns:
      Mapping of canonical name to the identifier it was derived from.

    Raises:
      DefinitionNameCollisionError: If two distinct identifiers share a name.
    """
    definitions = schema.get("definitions")
    if not isinstance(definitions, MutableMapping):
        return {}

    origins: dict[str, str] = {}
    renamed: dict[str, Any] = {}
    for identifier, definition in definitions.items():
        name = classify_identifier(identifier)
        if name in origins:
            raise DefinitionNameCollisionError(
                f"Definitions '{origins[name]}' and '{identifier}' "
                f"both map to the name '{name}'."
            )
        origins[name] = identifier
        renamed[name] = definition

    definitions.clear()
    definitions.update(renamed)
    logger.debug("Renamed %d definitions", len(renamed))
    return origins


def rewrite_references(schema: SchemaNode) -> SchemaNode:
    """Drop ``$id`` from every node and point remote ``$ref`` values at local definitions.

    References back to the root document become pointers into the root itself.
    """
    root_identifier = schema.get("$id")
    root_uri = urldefrag(root_identifier)[0] if isinstance(root_identifier, str) else None
    for node in iter_schema_nodes(schema):
        node.pop("$id", None)
        ref = node.get("$ref")
        if not isinstance(ref, str) or ref.startswith(LOCAL_POINTER_SIGIL):
            continue
        base, fragment = urldefrag(ref)
        if base == root_uri:
            node["$ref"] = f"{LOCAL_POINTER_SIGIL}{fragment}"
        else:
            node["$ref"] = local_pointer_for(ref)
    return schema


def local_pointer_for(identifier: str) -> str:
    """Build the local pointer that replaces a remote ``$ref``.

    ``http://asyncapi.com/definitions/2.4.0/parameters.json#/definitions/foo``
    becomes ``#/definitions/parameters/definitions/foo``.
    """
    base, fragment = urldefrag(identifier)
    return f"{DEFINITIONS_POINTER}{classify_identifier(base)}{fragment}"
