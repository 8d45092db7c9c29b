"""Canonical definition names derived from absolute schema identifiers."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urldefrag, urlsplit

JSON_SCHEMA_DEFINITION_NAME = "json-schema-draft-07-schema"

_JSON_SCHEMA_AUTHORITY = "json-schema.org"
_SPEC_AUTHORITY = "asyncapi.com"
_SCHEME = "http"
_JSON_SUFFIX = ".json"


class IdentifierShape(Enum):
    """Recognized identifier shapes, in classification priority order."""

    JSON_SCHEMA = "json_schema"
    SPEC_DEFINITION = "spec_definition"
    BINDING_DEFINITION = "binding_definition"
    LOCAL = "local"


@dataclass(frozen=True)
class ClassifiedIdentifier:
    """Identifier shape together with its canonical definition name."""

    identifier: str
    shape: IdentifierShape
    name: str


def classify_identifier(identifier: str) -> str:
    """Return the canonical definition name for ``identifier``."""
    return describe_identifier(identifier).name


def describe_identifier(identifier: str) -> ClassifiedIdentifier:
    """Classify ``identifier`` and derive its canonical definition name.

    Examples:
      ``http://json-schema.org/draft-07/schema`` -> ``json-schema-draft-07-schema``
      ``http://asyncapi.com/definitions/2.4.0/parameters.json`` -> ``parameters``
      ``http://asyncapi.com/bindings/kafka/0.1.0/channel.json``
        -> ``bindings-kafka-0.1.0-channel``
      ``./some/other/file.json`` -> ``file``
    """
    base, fragment = urldefrag(identifier)
    parts = urlsplit(base)
    authority = parts.netloc.lower() if parts.scheme.lower() == _SCHEME else ""

    if authority == _JSON_SCHEMA_AUTHORITY:
        return ClassifiedIdentifier(
            identifier, IdentifierShape.JSON_SCHEMA, JSON_SCHEMA_DEFINITION_NAME
        )

    if authority == _SPEC_AUTHORITY:
        segments = parts.path.lstrip("/").split("/")
        spec_name = _spec_definition_name(segments, fragment)
        if spec_name is not None:
            return ClassifiedIdentifier(identifier, IdentifierShape.SPEC_DEFINITION, spec_name)
        binding_name = _binding_definition_name(segments)
        if binding_name is not None:
            return ClassifiedIdentifier(
                identifier, IdentifierShape.BINDING_DEFINITION, binding_name
            )

    return ClassifiedIdentifier(identifier, IdentifierShape.LOCAL, _file_stem(base))


def _spec_definition_name(segments: list[str], fragment: str) -> str | None:
    # definitions/<version>/<name>.json where <name> may span several segments
    if len(segments) < 3 or segments[0].lower() != "definitions" or not segments[1]:
        return None
    name = _strip_json_suffix("/".join(segments[2:]))
    if not name:
        return None
    return name.replace("/", "-") + fragment


def _binding_definition_name(segments: list[str]) -> str | None:
    # bindings/<protocol>/<version>/<name>.json
    if len(segments) < 4 or segments[0].lower() != "bindings":
        return None
    protocol, version = segments[1], segments[2]
    name = _strip_json_suffix("/".join(segments[3:]))
    if not protocol or not version or not name:
        return None
    return f"bindings-{protocol}-{version}-{name}"


def _file_stem(path: str) -> str:
    base_name = posixpath.basename(urlsplit(path).path or path)
    return _strip_json_suffix(base_name) or base_name


def _strip_json_suffix(name: str) -> str | None:
    if not name.lower().endswith(_JSON_SUFFIX) or len(name) == len(_JSON_SUFFIX):
        return None
    return name[: -len(_JSON_SUFFIX)]
