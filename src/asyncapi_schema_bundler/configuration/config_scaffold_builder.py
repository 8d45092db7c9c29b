"""Settings scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "bundler.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Settings for asyncapi-schema-bundler.
# Relative directories are resolved against the directory holding this file.
# Every key is optional; omitted directories fall back to the defaults shown.

# One subdirectory per spec version, each holding one JSON file per definition.
definitions_dir: "definitions"

# <protocol>/<binding version>/*.json binding schemas.
bindings_dir: "bindings"

# Example files referenced from a definition's "example" $ref.
examples_dir: "examples"

# Receives <version>.json and <version>-without-$id.json.
output_dir: "schemas"

# File name fragment identifying the entry schema of each version.
root_schema_marker: "asyncapi"

# Restrict the run to specific versions. Leave empty to bundle every version.
versions: []
"""


def build_placeholder_settings() -> str:
    """Build a YAML settings template with the default layout and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_settings(output_path: Path | str) -> Path:
    """Write the settings template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Settings file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_settings(), encoding="utf-8")
    return destination.resolve()
