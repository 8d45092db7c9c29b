"""Reading schema fragments, binding schemas and referenced example files."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any
from urllib.parse import urldefrag, urlsplit

DEFAULT_ROOT_SCHEMA_MARKER = "asyncapi"
_EXAMPLES_SEGMENT = "examples"
_MAX_READ_WORKERS = 8

logger = logging.getLogger(__name__)


class FragmentLoadError(Exception):
    """Raised when a schema fragment or example file cannot be loaded."""


def find_root_schema(version_dir: Path, root_marker: str = DEFAULT_ROOT_SCHEMA_MARKER) -> Path:
    """Return the entry schema of a version directory."""
    candidates = sorted(
        path for path in _json_files(version_dir) if root_marker in path.name
    )
    if not candidates:
        raise FragmentLoadError(
            f"No root schema containing '{root_marker}' found in {version_dir}"
        )
    if len(candidates) > 1:
        names = ", ".join(path.name for path in candidates)
        raise FragmentLoadError(f"Multiple root schema candidates in {version_dir}: {names}")
    return candidates[0]


def read_definition_fragments(
    version_dir: Path,
    examples_dir: Path,
    root_marker: str = DEFAULT_ROOT_SCHEMA_MARKER,
) -> list[dict[str, Any]]:
    """Load every definition fragment of a version except the root schema.

    A fragment whose ``example`` holds a single ``$ref`` to an example file has
    that reference replaced by an ``examples`` array with the file contents.
    """
    paths = [path for path in _json_files(version_dir) if root_marker not in path.name]
    fragments = _read_all(paths)
    return [expand_example_reference(fragment, examples_dir) for fragment in fragments]


def read_binding_fragments(bindings_dir: Path) -> list[dict[str, Any]]:
    """Load every binding schema laid out as ``<protocol>/<version>/*.json``."""
    paths: list[Path] = []
    for protocol_dir in _subdirectories(bindings_dir):
        for version_dir in _subdirectories(protocol_dir):
            paths.extend(_json_files(version_dir))
    return _read_all(paths)


def expand_example_reference(fragment: dict[str, Any], examples_dir: Path) -> dict[str, Any]:
    """Swap a referenced ``example`` for an inline ``examples`` array."""
    example = fragment.get("example")
    if not isinstance(example, Mapping) or not isinstance(example.get("$ref"), str):
        return fragment
    fragment["examples"] = read_json_file(_example_path(example["$ref"], examples_dir))
    del fragment["example"]
    return fragment


def read_json_file(path: Path) -> Any:
    """Parse one JSON file, wrapping I/O and parse failures."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise FragmentLoadError(f"Unable to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise FragmentLoadError(f"Invalid JSON in {path}: {exc}") from exc


def _example_path(reference: str, examples_dir: Path) -> Path:
    # http://asyncapi.com/examples/2.4.0/info.json -> <examples_dir>/2.4.0/info.json
    segments = urlsplit(urldefrag(reference)[0]).path.split("/")
    if _EXAMPLES_SEGMENT not in segments:
        raise FragmentLoadError(f"Example reference outside the examples tree: {reference}")
    relative = segments[segments.index(_EXAMPLES_SEGMENT) + 1 :]
    root = examples_dir.resolve()
    path = root.joinpath(*relative).resolve()
    if not path.is_relative_to(root):
        raise FragmentLoadError(f"Example reference outside the examples tree: {reference}")
    return path


def _read_all(paths: Iterable[Path]) -> list[dict[str, Any]]:
    paths = list(paths)
    if not paths:
        return []
    with ThreadPoolExecutor(max_workers=min(_MAX_READ_WORKERS, len(paths))) as executor:
        documents = list(executor.map(read_json_file, paths))

    for path, document in zip(paths, documents, strict=True):
        if not isinstance(document, dict):
            raise FragmentLoadError(f"Schema fragment must be a JSON object: {path}")
    logger.debug("Read %d fragments", len(documents))
    return documents


def _json_files(directory: Path) -> list[Path]:
    try:
        return sorted(
            path for path in directory.iterdir() if path.is_file() and path.suffix == ".json"
        )
    except OSError as exc:
        raise FragmentLoadError(f"Unable to list directory {directory}: {exc}") from exc


def _subdirectories(directory: Path) -> list[Path]:
    try:
        return sorted(path for path in directory.iterdir() if path.is_dir())
    except OSError as exc:
        raise FragmentLoadError(f"Unable to list directory {directory}: {exc}") from exc
