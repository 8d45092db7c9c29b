"""In-memory schema merge: collect fragments by ``$id`` and embed remote references."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urldefrag, urljoin, urlsplit

from referencing import Registry
from referencing.exceptions import NoSuchResource, Unresolvable
from referencing.jsonschema import DRAFT7

from asyncapi_schema_bundler.schema_tree import iter_subschemas

logger = logging.getLogger(__name__)


class SchemaBundlingError(Exception):
    """Raised when fragments cannot be registered or references cannot be resolved."""


@dataclass(frozen=True)
class SchemaHandle:
    """A registered fragment addressed by its retrieval URI."""

    uri: str
    contents: Mapping[str, Any]


class SchemaBundler:
    """Collects schema fragments and merges a root schema with everything it references.

    Usage mirrors a classic JSON Schema bundler: ``add`` every fragment, ``get``
    the entry schema, then ``bundle`` it. Each referenced document is embedded
    once under ``definitions`` keyed by its identifier, with its ``$id`` kept so
    that references written against absolute identifiers still resolve.
    """

    def __init__(self) -> None:
        self._fragments: dict[str, Mapping[str, Any]] = {}

    def __contains__(self, uri: str) -> bool:
        return _document_uri(uri) in self._fragments

    def add(self, fragment: Mapping[str, Any]) -> str:
        """Register ``fragment`` under its ``$id`` and return the registered URI."""
        identifier = fragment.get("$id") if isinstance(fragment, Mapping) else None
        if not isinstance(identifier, str) or not identifier:
            raise SchemaBundlingError("Schema fragments must declare a string $id.")
        uri = _document_uri(identifier)
        if uri in self._fragments and self._fragments[uri] != fragment:
            logger.warning("Replacing previously added fragment %s", uri)
        self._fragments[uri] = fragment
        return uri

    def get(self, locator: str | Path) -> SchemaHandle:
        """Return a handle for a registered identifier, a ``file://`` URI or a path.

        Files are read and registered under their ``$id`` when they declare one,
        otherwise under their file URI.
        """
        if isinstance(locator, str) and _document_uri(locator) in self._fragments:
            uri = _document_uri(locator)
            return SchemaHandle(uri=uri, contents=self._fragments[uri])

        path = _locator_path(locator)
        try:
            contents = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SchemaBundlingError(f"Unable to read schema {path}: {exc}") from exc
        if not isinstance(contents, MutableMapping):
            raise SchemaBundlingError(f"Schema root must be an object: {path}")

        identifier = contents.get("$id")
        uri = _document_uri(identifier) if isinstance(identifier, str) else path.resolve().as_uri()
        self._fragments[uri] = contents
        return SchemaHandle(uri=uri, contents=contents)

    def bundle(self, handle: SchemaHandle) -> dict[str, Any]:
        """Return a deep copy of the handle's schema with every remote document embedded.

        Raises:
          SchemaBundlingError: If a remote reference cannot be resolved.
        """
        registry = self._build_registry()
        bundled = copy.deepcopy(dict(handle.contents))
        definitions = bundled.setdefault("definitions", {})
        if not isinstance(definitions, MutableMapping):
            raise SchemaBundlingError("Root schema 'definitions' must be an object.")

        embedded: set[str] = {handle.uri}
        pending: list[tuple[Any, str]] = [(bundled, handle.uri)]
        while pending:
            node, base_uri = pending.pop()
            for document_uri in self._embed_references(node, base_uri, registry, embedded):
                definitions[document_uri] = copy.deepcopy(dict(self._fragments[document_uri]))
                pending.append((definitions[document_uri], document_uri))

        logger.debug("Bundled %s with %d embedded documents", handle.uri, len(embedded) - 1)
        return bundled

    def _build_registry(self) -> Registry:
        resources = [
            (uri, DRAFT7.create_resource(contents))
            for uri, contents in self._fragments.items()
        ]
        return Registry().with_resources(resources)

    def _embed_references(
        self, root: Any, base_uri: str, registry: Registry, embedded: set[str]
    ) -> list[str]:
        """Walk one document and return the not-yet-embedded documents it references."""
        discovered: list[str] = []
        stack: list[tuple[Any, str]] = [(root, base_uri)]
        while stack:
            node, scope = stack.pop()
            if isinstance(node, list):
                stack.extend((item, scope) for item in node)
                continue
            if not isinstance(node, MutableMapping):
                continue

            node_id = node.get("$id")
            if isinstance(node_id, str) and node is not root:
                scope = _document_uri(urljoin(scope, node_id))

            ref = node.get("$ref")
            if isinstance(ref, str):
                target = urljoin(scope, ref)
                document_uri = _document_uri(target)
                if document_uri != scope and document_uri not in embedded:
                    _ensure_resolvable(registry, target)
                    if document_uri not in self._fragments:
                        raise SchemaBundlingError(
                            f"Reference {target} points at a subschema $id, "
                            "not a registered document."
                        )
                    embedded.add(document_uri)
                    discovered.append(document_uri)

            stack.extend((child, scope) for child in iter_subschemas(node))
        return discovered


def _ensure_resolvable(registry: Registry, target: str) -> None:
    try:
        registry.resolver().lookup(target)
    except (NoSuchResource, Unresolvable) as exc:
        raise SchemaBundlingError(f"Unable to resolve reference {target}: {exc}") from exc


def _document_uri(uri: str) -> str:
    return urldefrag(uri)[0]


def _locator_path(locator: str | Path) -> Path:
    if isinstance(locator, Path):
        return locator
    parts = urlsplit(locator)
    if parts.scheme == "file":
        return Path(unquote(parts.path))
    return Path(locator)
