"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from asyncapi_schema_bundler.cli import cli

FIXTURE_ROOT = Path(__file__).resolve().parents[2] / "fixtures" / "spec_repository"


def test_bundle_command_writes_and_echoes_outputs(tmp_path: Path) -> None:
    runner = CliRunner()
    output_dir = tmp_path / "schemas"

    result = runner.invoke(
        cli,
        [
            "bundle",
            "--root",
            str(FIXTURE_ROOT),
            "--output-dir",
            str(output_dir),
            "--spec-version",
            "2.4.0",
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        str((output_dir / "2.4.0.json").resolve()),
        str((output_dir / "2.4.0-without-$id.json").resolve()),
    ]
    stripped = json.loads((output_dir / "2.4.0-without-$id.json").read_text(encoding="utf-8"))
    assert "json-schema-draft-07-schema" in stripped["definitions"]
    assert "$id" not in stripped


def test_bundle_command_reads_settings_file(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = tmp_path / "bundler.yaml"
    config_path.write_text(
        "\n".join(
            [
                f"definitions_dir: {FIXTURE_ROOT / 'definitions'}",
                f"bindings_dir: {FIXTURE_ROOT / 'bindings'}",
                f"examples_dir: {FIXTURE_ROOT / 'examples'}",
                "output_dir: out",
                "versions: ['2.3.0']",
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["bundle", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "2.3.0.json").exists()
    assert (tmp_path / "out" / "2.3.0-without-$id.json").exists()
    assert not (tmp_path / "out" / "2.4.0.json").exists()


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "bundler.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert result.output.strip() == str(output_path.resolve())
    assert "definitions_dir:" in output_path.read_text(encoding="utf-8")


def test_classify_command_prints_shape_and_name() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "classify",
            "http://asyncapi.com/bindings/kafka/0.1.0/channel.json",
            "http://json-schema.org/draft-07/schema#",
        ],
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "http://asyncapi.com/bindings/kafka/0.1.0/channel.json\t"
        "binding_definition\tbindings-kafka-0.1.0-channel",
        "http://json-schema.org/draft-07/schema#\tjson_schema\tjson-schema-draft-07-schema",
    ]
