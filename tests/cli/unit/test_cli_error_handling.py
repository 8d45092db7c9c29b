"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from asyncapi_schema_bundler.cli import main


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["bundle", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_classify_argument_returns_clean_click_error(capsys) -> None:
    exit_code = main(["classify"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing argument" in captured.err
    assert "Traceback" not in captured.err


def test_bundling_failure_is_reported_without_traceback(tmp_path: Path, capsys) -> None:
    exit_code = main(["bundle", "--root", str(tmp_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Unable to list definitions directory" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_settings_file_is_reported(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "bundler.yaml"
    config_path.write_text("unexpected: true\n", encoding="utf-8")

    exit_code = main(["bundle", "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Unknown settings keys: unexpected" in captured.err
