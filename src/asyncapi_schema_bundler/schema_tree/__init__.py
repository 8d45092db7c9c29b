"""Schema tree exports."""

from .schema_walk import SchemaNode, iter_schema_nodes, iter_subschemas

__all__ = ["SchemaNode", "iter_schema_nodes", "iter_subschemas"]
