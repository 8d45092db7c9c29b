"""Redirect references inside embedded third-party schemas to their own namespace."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass

from asyncapi_schema_bundler.schema_tree import SchemaNode, iter_schema_nodes

from .identifier_classifier import JSON_SCHEMA_DEFINITION_NAME
from .reference_rewriter import DEFINITIONS_POINTER, LOCAL_POINTER_SIGIL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForeignSchema:
    """A third-party schema embedded as one entry of the bundle's definitions."""

    definition_name: str
    namespace_segment: str = "definitions"

    @property
    def root_pointer(self) -> str:
        return f"{DEFINITIONS_POINTER}{self.definition_name}"

    @property
    def namespace_pointer(self) -> str:
        return f"{self.root_pointer}/{self.namespace_segment}/"


AVRO_SCHEMA = ForeignSchema("avroSchema_v1")
OPENAPI_SCHEMA = ForeignSchema("openapiSchema_3_0")
JSON_SCHEMA = ForeignSchema(JSON_SCHEMA_DEFINITION_NAME)

FOREIGN_SCHEMAS: tuple[ForeignSchema, ...] = (AVRO_SCHEMA, OPENAPI_SCHEMA, JSON_SCHEMA)


def fixup_foreign_schema(subtree: SchemaNode, foreign: ForeignSchema) -> SchemaNode:
    """Rewrite local pointers inside one embedded schema.

    Must only be given ``definitions[foreign.definition_name]``; applied to the
    whole bundle it would corrupt unrelated references. Not idempotent: every
    application prefixes the namespace again.
    """
    for node in iter_schema_nodes(subtree):
        ref = node.get("$ref")
        if not isinstance(ref, str):
            continue
        if ref == LOCAL_POINTER_SIGIL:
            node["$ref"] = foreign.root_pointer
        elif ref.startswith(DEFINITIONS_POINTER):
            node["$ref"] = foreign.namespace_pointer + ref[len(DEFINITIONS_POINTER) :]
    return subtree


def apply_foreign_schema_fixups(
    schema: SchemaNode, foreign_schemas: tuple[ForeignSchema, ...] = FOREIGN_SCHEMAS
) -> SchemaNode:
    """Run each foreign-schema fixup on its own subtree of an identifier-stripped bundle."""
    definitions = schema.get("definitions")
    if not isinstance(definitions, MutableMapping):
        return schema
    for foreign in foreign_schemas:
        subtree = definitions.get(foreign.definition_name)
        if not isinstance(subtree, MutableMapping):
            logger.debug("Foreign schema %s not present, skipping", foreign.definition_name)
            continue
        fixup_foreign_schema(subtree, foreign)
    return schema
