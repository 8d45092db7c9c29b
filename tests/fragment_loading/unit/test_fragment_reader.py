"""Fragment reader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from asyncapi_schema_bundler.fragment_loading.fragment_reader import (
    FragmentLoadError,
    expand_example_reference,
    find_root_schema,
    read_binding_fragments,
    read_definition_fragments,
)

FIXTURE_ROOT = Path(__file__).resolve().parents[2] / "fixtures" / "spec_repository"


def _write_json(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_reads_every_definition_except_the_root_schema() -> None:
    fragments = read_definition_fragments(
        FIXTURE_ROOT / "definitions" / "2.4.0", FIXTURE_ROOT / "examples"
    )
    identifiers = {fragment["$id"] for fragment in fragments}

    assert len(fragments) == 14
    assert "http://asyncapi.com/definitions/2.4.0/asyncapi.json" not in identifiers
    assert "http://json-schema.org/draft-07/schema#" in identifiers


def test_replaces_referenced_example_with_examples_array() -> None:
    fragments = read_definition_fragments(
        FIXTURE_ROOT / "definitions" / "2.4.0", FIXTURE_ROOT / "examples"
    )
    info = next(f for f in fragments if f["$id"].endswith("/info.json"))

    assert "example" not in info
    assert info["examples"] == [
        {
            "title": "AsyncAPI Sample App",
            "description": "This is a sample server.",
            "version": "1.0.1",
        }
    ]


def test_keeps_inline_example_values(tmp_path: Path) -> None:
    fragment = {"$id": "http://asyncapi.com/definitions/2.4.0/tag.json", "example": "inline"}

    assert expand_example_reference(fragment, tmp_path) == fragment


def test_missing_example_file_is_a_load_error(tmp_path: Path) -> None:
    fragment = {"example": {"$ref": "http://asyncapi.com/examples/2.4.0/missing.json"}}

    with pytest.raises(FragmentLoadError, match="missing.json"):
        expand_example_reference(fragment, tmp_path)


def test_unparsable_example_file_is_a_load_error(tmp_path: Path) -> None:
    (tmp_path / "2.4.0").mkdir()
    (tmp_path / "2.4.0" / "info.json").write_text("[{", encoding="utf-8")
    fragment = {"example": {"$ref": "http://asyncapi.com/examples/2.4.0/info.json"}}

    with pytest.raises(FragmentLoadError, match="Invalid JSON"):
        expand_example_reference(fragment, tmp_path)


def test_example_reference_outside_examples_tree_is_rejected(tmp_path: Path) -> None:
    fragment = {"example": {"$ref": "http://asyncapi.com/samples/info.json"}}

    with pytest.raises(FragmentLoadError, match="outside the examples tree"):
        expand_example_reference(fragment, tmp_path)


def test_example_reference_escaping_examples_directory_is_rejected(tmp_path: Path) -> None:
    examples_dir = tmp_path / "examples"
    examples_dir.mkdir()
    (tmp_path / "secret.json").write_text('{"token": "x"}', encoding="utf-8")
    fragment = {"example": {"$ref": "http://asyncapi.com/examples/../secret.json"}}

    with pytest.raises(FragmentLoadError, match="outside the examples tree"):
        expand_example_reference(fragment, examples_dir)
    assert "example" in fragment


def test_reads_bindings_and_ignores_non_json_files() -> None:
    fragments = read_binding_fragments(FIXTURE_ROOT / "bindings")

    assert sorted(fragment["$id"] for fragment in fragments) == [
        "http://asyncapi.com/bindings/http/0.1.0/message.json",
        "http://asyncapi.com/bindings/http/0.1.0/operation.json",
        "http://asyncapi.com/bindings/kafka/0.1.0/channel.json",
        "http://asyncapi.com/bindings/kafka/0.1.0/operation.json",
    ]


def test_missing_bindings_directory_is_a_load_error(tmp_path: Path) -> None:
    with pytest.raises(FragmentLoadError, match="Unable to list directory"):
        read_binding_fragments(tmp_path / "absent")


def test_invalid_definition_file_is_a_load_error(tmp_path: Path) -> None:
    _write_json(tmp_path / "info.json", {"$id": "http://asyncapi.com/definitions/1/info.json"})
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")

    with pytest.raises(FragmentLoadError, match="broken.json"):
        read_definition_fragments(tmp_path, tmp_path)


def test_non_object_definition_is_a_load_error(tmp_path: Path) -> None:
    _write_json(tmp_path / "list.json", [1, 2])

    with pytest.raises(FragmentLoadError, match="must be a JSON object"):
        read_definition_fragments(tmp_path, tmp_path)


def test_finds_the_root_schema_by_marker() -> None:
    root = find_root_schema(FIXTURE_ROOT / "definitions" / "2.4.0")

    assert root.name == "asyncapi.json"


def test_root_schema_must_exist(tmp_path: Path) -> None:
    _write_json(tmp_path / "info.json", {})

    with pytest.raises(FragmentLoadError, match="No root schema"):
        find_root_schema(tmp_path)
