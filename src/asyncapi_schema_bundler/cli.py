"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from asyncapi_schema_bundler.configuration import (
    DEFAULT_CONFIG_FILENAME,
    BundlerSettings,
    ConfigurationError,
    build_settings,
    load_settings,
    write_placeholder_settings,
)
from asyncapi_schema_bundler.reference_rewriting import describe_identifier
from asyncapi_schema_bundler.version_bundling import VersionBundler, VersionBundlingError


class CliError(Exception):
    """Custom CLI error."""


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; INFO when verbose, WARNING otherwise."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="asyncapi-schema-bundler")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log bundling progress.")
def cli(verbose: bool) -> None:
    """Bundle split AsyncAPI JSON Schema definitions into one file per version."""
    configure_logging(verbose)


@cli.command(name="bundle")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML settings file",
)
@click.option(
    "--root",
    "root_dir",
    required=False,
    default=".",
    show_default=True,
    type=click.Path(path_type=str),
    help="Repository root holding definitions/, bindings/, examples/ and schemas/",
)
@click.option("--definitions-dir", type=click.Path(path_type=str), help="Spec definitions root")
@click.option("--bindings-dir", type=click.Path(path_type=str), help="Binding schemas root")
@click.option("--examples-dir", type=click.Path(path_type=str), help="Referenced examples root")
@click.option("--output-dir", type=click.Path(path_type=str), help="Bundled schema destination")
@click.option(
    "--spec-version",
    "versions",
    multiple=True,
    help="Bundle only this spec version (repeatable)",
)
def bundle(
    config_path: str | None,
    root_dir: str,
    definitions_dir: str | None,
    bindings_dir: str | None,
    examples_dir: str | None,
    output_dir: str | None,
    versions: tuple[str, ...],
) -> None:
    """Bundle every spec version into identifier-preserving and identifier-stripped files."""
    try:
        settings = _resolve_settings(
            config_path,
            root_dir,
            definitions_dir=definitions_dir,
            bindings_dir=bindings_dir,
            examples_dir=examples_dir,
            output_dir=output_dir,
            versions=versions,
        )
        outputs = VersionBundler(settings).run()
    except (ConfigurationError, VersionBundlingError) as exc:
        raise CliError(str(exc)) from exc
    for output in outputs:
        click.echo(str(output.with_ids_path))
        click.echo(str(output.without_ids_path))


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML settings template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML settings file describing the default directory layout."""
    try:
        resolved_output = write_placeholder_settings(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="classify")
@click.argument("identifiers", nargs=-1, required=True)
def classify(identifiers: tuple[str, ...]) -> None:
    """Print the canonical definition name of each schema identifier."""
    for identifier in identifiers:
        classified = describe_identifier(identifier)
        click.echo(f"{identifier}\t{classified.shape.value}\t{classified.name}")


def _resolve_settings(
    config_path: str | None,
    root_dir: str,
    *,
    definitions_dir: str | None,
    bindings_dir: str | None,
    examples_dir: str | None,
    output_dir: str | None,
    versions: tuple[str, ...],
) -> BundlerSettings:
    if config_path:
        base = load_settings(config_path)
    else:
        base = build_settings(Path(root_dir))
    return BundlerSettings(
        definitions_dir=_override(definitions_dir, base.definitions_dir),
        bindings_dir=_override(bindings_dir, base.bindings_dir),
        examples_dir=_override(examples_dir, base.examples_dir),
        output_dir=_override(output_dir, base.output_dir),
        root_schema_marker=base.root_schema_marker,
        versions=versions or base.versions,
    )


def _override(value: str | None, default: Path) -> Path:
    return Path(value).resolve() if value else default


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
