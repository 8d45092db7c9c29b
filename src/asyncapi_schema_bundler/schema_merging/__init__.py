"""Schema merging exports."""

from .schema_registry import SchemaBundler, SchemaBundlingError, SchemaHandle

__all__ = ["SchemaBundler", "SchemaBundlingError", "SchemaHandle"]
