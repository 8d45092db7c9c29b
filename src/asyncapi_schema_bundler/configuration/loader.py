"""Settings loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from asyncapi_schema_bundler.fragment_loading import DEFAULT_ROOT_SCHEMA_MARKER

from .bundler_settings import BundlerSettings, build_settings

_DIRECTORY_KEYS = ("definitions_dir", "bindings_dir", "examples_dir", "output_dir")


class ConfigurationError(Exception):
    """Raised when the settings file is invalid."""


def load_settings(config_path: Path | str) -> BundlerSettings:
    """Load and validate a YAML settings file.

    Relative directories are resolved against the directory holding the file.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse settings file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Settings root must be a mapping.")

    unknown = sorted(set(parsed) - {*_DIRECTORY_KEYS, "root_schema_marker", "versions"})
    if unknown:
        raise ConfigurationError(f"Unknown settings keys: {', '.join(map(str, unknown))}")

    directories = {
        key: _optional_string(parsed.get(key), key) for key in _DIRECTORY_KEYS
    }
    root_schema_marker = _optional_string(
        parsed.get("root_schema_marker"), "root_schema_marker"
    )
    return build_settings(
        path.resolve().parent,
        **directories,
        root_schema_marker=root_schema_marker or DEFAULT_ROOT_SCHEMA_MARKER,
        versions=_parse_versions(parsed.get("versions")),
    )


def _parse_versions(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Sequence):
        raise ConfigurationError("versions must be a string or a list of strings.")
    versions: list[str] = []
    for item in value:
        if not isinstance(item, (str, int, float)) or isinstance(item, bool):
            raise ConfigurationError("versions entries must be strings.")
        text = str(item).strip()
        if not text:
            raise ConfigurationError("versions entries must not be empty.")
        versions.append(text)
    return tuple(versions)


def _optional_string(value: Any, label: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{label} must be a non-empty string.")
    return value.strip()
