"""Reference rewriting exports."""

from .foreign_schema_fixup import (
    AVRO_SCHEMA,
    FOREIGN_SCHEMAS,
    JSON_SCHEMA,
    OPENAPI_SCHEMA,
    ForeignSchema,
    apply_foreign_schema_fixups,
    fixup_foreign_schema,
)
from .identifier_classifier import (
    JSON_SCHEMA_DEFINITION_NAME,
    ClassifiedIdentifier,
    IdentifierShape,
    classify_identifier,
    describe_identifier,
)
from .reference_rewriter import (
    DefinitionNameCollisionError,
    local_pointer_for,
    rename_definitions,
    rewrite_references,
    strip_identifiers,
)

__all__ = [
    "AVRO_SCHEMA",
    "FOREIGN_SCHEMAS",
    "JSON_SCHEMA",
    "OPENAPI_SCHEMA",
    "ForeignSchema",
    "apply_foreign_schema_fixups",
    "fixup_foreign_schema",
    "JSON_SCHEMA_DEFINITION_NAME",
    "ClassifiedIdentifier",
    "IdentifierShape",
    "classify_identifier",
    "describe_identifier",
    "DefinitionNameCollisionError",
    "local_pointer_for",
    "rename_definitions",
    "rewrite_references",
    "strip_identifiers",
]
