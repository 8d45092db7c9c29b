"""Version bundling entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

WITHOUT_IDS_SUFFIX = "-without-$id"


@dataclass(frozen=True)
class VersionBundle:
    """Both bundled variants of one spec version."""

    version: str
    with_ids: dict[str, Any]
    without_ids: dict[str, Any]


@dataclass(frozen=True)
class VersionOutputs:
    """Files written for one spec version."""

    version: str
    with_ids_path: Path
    without_ids_path: Path


def output_paths(output_dir: Path, version: str) -> tuple[Path, Path]:
    """Return the identifier-preserving and identifier-stripped output paths."""
    return (
        output_dir / f"{version}.json",
        output_dir / f"{version}{WITHOUT_IDS_SUFFIX}.json",
    )
