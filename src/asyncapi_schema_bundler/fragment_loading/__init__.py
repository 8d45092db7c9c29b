"""Fragment loading exports."""

from .fragment_reader import (
    DEFAULT_ROOT_SCHEMA_MARKER,
    FragmentLoadError,
    expand_example_reference,
    find_root_schema,
    read_binding_fragments,
    read_definition_fragments,
    read_json_file,
)

__all__ = [
    "DEFAULT_ROOT_SCHEMA_MARKER",
    "FragmentLoadError",
    "expand_example_reference",
    "find_root_schema",
    "read_binding_fragments",
    "read_definition_fragments",
    "read_json_file",
]
