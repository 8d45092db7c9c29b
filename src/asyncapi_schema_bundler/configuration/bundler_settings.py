"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from asyncapi_schema_bundler.fragment_loading import DEFAULT_ROOT_SCHEMA_MARKER

DEFAULT_DEFINITIONS_DIRNAME = "definitions"
DEFAULT_BINDINGS_DIRNAME = "bindings"
DEFAULT_EXAMPLES_DIRNAME = "examples"
DEFAULT_OUTPUT_DIRNAME = "schemas"


@dataclass(frozen=True)
class BundlerSettings:
    """Input and output locations for one bundling run."""

    definitions_dir: Path
    bindings_dir: Path
    examples_dir: Path
    output_dir: Path
    root_schema_marker: str = DEFAULT_ROOT_SCHEMA_MARKER
    versions: tuple[str, ...] = field(default_factory=tuple)


def build_settings(
    base_dir: Path | str,
    *,
    definitions_dir: Path | str | None = None,
    bindings_dir: Path | str | None = None,
    examples_dir: Path | str | None = None,
    output_dir: Path | str | None = None,
    root_schema_marker: str = DEFAULT_ROOT_SCHEMA_MARKER,
    versions: tuple[str, ...] = (),
) -> BundlerSettings:
    """Build settings with directories defaulting to the standard repository layout."""
    base = Path(base_dir)
    return BundlerSettings(
        definitions_dir=_resolve(base, definitions_dir, DEFAULT_DEFINITIONS_DIRNAME),
        bindings_dir=_resolve(base, bindings_dir, DEFAULT_BINDINGS_DIRNAME),
        examples_dir=_resolve(base, examples_dir, DEFAULT_EXAMPLES_DIRNAME),
        output_dir=_resolve(base, output_dir, DEFAULT_OUTPUT_DIRNAME),
        root_schema_marker=root_schema_marker,
        versions=tuple(versions),
    )


def _resolve(base: Path, value: Path | str | None, default_name: str) -> Path:
    candidate = Path(value) if value is not None else Path(default_name)
    if candidate.is_absolute():
        return candidate
    return (base / candidate).resolve()
