"""Version bundling exports."""

from .bundle_contracts import WITHOUT_IDS_SUFFIX, VersionBundle, VersionOutputs, output_paths
from .version_bundler import (
    AUTO_GENERATED_MARKER,
    VersionBundler,
    VersionBundlingError,
    annotate_description,
    write_schema,
)

__all__ = [
    "WITHOUT_IDS_SUFFIX",
    "VersionBundle",
    "VersionOutputs",
    "output_paths",
    "AUTO_GENERATED_MARKER",
    "VersionBundler",
    "VersionBundlingError",
    "annotate_description",
    "write_schema",
]
