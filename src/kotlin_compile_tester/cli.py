"""Command line interface entry point."""

from __future__ import annotations

import sys
from dataclasses import replace

import click

from kotlin_compile_tester.compilation_run import (
    CompilationRunError,
    CompilerNotFoundError,
    KotlinCompilation,
)
from kotlin_compile_tester.configuration import (
    DEFAULT_REQUEST_FILENAME,
    ConfigurationError,
    load_request,
    write_placeholder_configuration,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="kotlin-compile-tester")
def cli() -> None:
    """Compile Kotlin sources for tests and report the outcome."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_REQUEST_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML compilation request template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML compilation request with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="compile")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON compilation request file",
)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Print helpful information about classpath and plugin resolution.",
)
def compile_sources(config_path: str, verbose: bool) -> None:
    """Stage the request's sources, run kotlinc and report the exit classification."""
    try:
        request = load_request(config_path)
        if verbose and not request.verbose:
            request = replace(request, verbose=True)
        result = KotlinCompilation(request, system_out=sys.stdout).run()
    except (ConfigurationError, CompilationRunError, CompilerNotFoundError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"exit code: {result.exit_code.value}")
    click.echo(f"classes: {result.classes_dir}")
    if not result.succeeded:
        raise CliError(f"Compilation finished with {result.exit_code.value}.")


@cli.command(name="locate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON compilation request file",
)
def locate_archives(config_path: str) -> None:
    """Show which supporting archives a request resolves to."""
    try:
        request = load_request(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    archives = KotlinCompilation(request).archives
    resolved = (
        ("kotlin-stdlib", archives.kotlin_stdlib),
        ("kotlin-stdlib-common", archives.kotlin_stdlib_common),
        ("kotlin-stdlib-jdk", archives.kotlin_stdlib_jdk),
        ("kotlin-reflect", archives.kotlin_reflect),
        ("kotlin-script-runtime", archives.kotlin_script_runtime),
        ("tools.jar", archives.tools_jar),
        ("kapt3", archives.kapt3_jar),
    )
    for name, path in resolved:
        click.echo(f"{name}: {path if path is not None else '-'}")


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
