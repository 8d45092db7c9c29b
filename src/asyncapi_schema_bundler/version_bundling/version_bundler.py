"""Per-version bundling: load, merge, strip identifiers and write both variants."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from asyncapi_schema_bundler.configuration import BundlerSettings
from asyncapi_schema_bundler.fragment_loading import (
    FragmentLoadError,
    find_root_schema,
    read_binding_fragments,
    read_definition_fragments,
)
from asyncapi_schema_bundler.reference_rewriting import (
    DefinitionNameCollisionError,
    apply_foreign_schema_fixups,
    strip_identifiers,
)
from asyncapi_schema_bundler.schema_merging import SchemaBundler, SchemaBundlingError

from .bundle_contracts import VersionBundle, VersionOutputs, output_paths

AUTO_GENERATED_MARKER = "!!Auto generated!! \n Do not manually edit. "
OUTPUT_INDENT = 4

logger = logging.getLogger(__name__)


class VersionBundlingError(Exception):
    """Raised when a spec version cannot be bundled."""


class VersionBundler:
    """Bundles every spec version found under the configured definitions directory."""

    def __init__(self, settings: BundlerSettings) -> None:
        self.settings = settings

    def run(self) -> list[VersionOutputs]:
        """Bundle and write the selected versions one after another.

        The first failing version aborts the run; outputs already written for
        earlier versions are left in place.
        """
        logger.info("Looking for separate definitions in %s", self.settings.definitions_dir)
        logger.info("Looking for binding schemas in %s", self.settings.bindings_dir)
        logger.info("Using output directory %s", self.settings.output_dir)

        versions = self.selected_versions()
        logger.info("Versions with separate definitions: %s", ", ".join(versions))
        try:
            self.settings.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise VersionBundlingError(
                f"Unable to create output directory {self.settings.output_dir}: {exc}"
            ) from exc

        outputs: list[VersionOutputs] = []
        for version in versions:
            logger.info("Bundling version %s", version)
            try:
                outputs.append(self.write_version(self.bundle_version(version)))
            except (
                FragmentLoadError,
                SchemaBundlingError,
                DefinitionNameCollisionError,
                OSError,
            ) as exc:
                raise VersionBundlingError(f"Failed to bundle version {version}: {exc}") from exc
        return outputs

    def discover_versions(self) -> list[str]:
        """Return the version directory names under the definitions directory."""
        try:
            return sorted(
                path.name for path in self.settings.definitions_dir.iterdir() if path.is_dir()
            )
        except OSError as exc:
            raise VersionBundlingError(
                f"Unable to list definitions directory {self.settings.definitions_dir}: {exc}"
            ) from exc

    def selected_versions(self) -> list[str]:
        available = self.discover_versions()
        if not self.settings.versions:
            return available
        missing = [version for version in self.settings.versions if version not in available]
        if missing:
            raise VersionBundlingError(f"Unknown versions requested: {', '.join(missing)}")
        return list(self.settings.versions)

    def bundle_version(self, version: str) -> VersionBundle:
        """Build both bundled variants for ``version`` without writing them."""
        version_dir = self.settings.definitions_dir / version
        bundler = SchemaBundler()
        for fragment in read_definition_fragments(
            version_dir, self.settings.examples_dir, self.settings.root_schema_marker
        ):
            bundler.add(fragment)
        for fragment in read_binding_fragments(self.settings.bindings_dir):
            bundler.add(fragment)

        root = bundler.get(find_root_schema(version_dir, self.settings.root_schema_marker))
        with_ids = bundler.bundle(root)
        annotate_description(with_ids)

        without_ids = apply_foreign_schema_fixups(strip_identifiers(copy.deepcopy(with_ids)))
        return VersionBundle(version=version, with_ids=with_ids, without_ids=without_ids)

    def write_version(self, bundle: VersionBundle) -> VersionOutputs:
        with_ids_path, without_ids_path = output_paths(self.settings.output_dir, bundle.version)
        logger.info("Writing the bundled file WITH $ids to %s", with_ids_path)
        write_schema(with_ids_path, bundle.with_ids)
        logger.info("Writing the bundled file WITHOUT $ids to %s", without_ids_path)
        write_schema(without_ids_path, bundle.without_ids)
        return VersionOutputs(
            version=bundle.version,
            with_ids_path=with_ids_path,
            without_ids_path=without_ids_path,
        )


def annotate_description(schema: dict[str, Any]) -> dict[str, Any]:
    """Prefix the schema description with the auto-generated marker."""
    description = schema.get("description")
    existing = description if description is not None else ""
    schema["description"] = f"{AUTO_GENERATED_MARKER}{existing}"
    return schema


def write_schema(path: Path, schema: dict[str, Any]) -> None:
    path.write_text(json.dumps(schema, indent=OUTPUT_INDENT, ensure_ascii=False), encoding="utf-8")
