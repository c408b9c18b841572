"""Compilation request scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_REQUEST_FILENAME = "compilation.yaml"

_REQUEST_SCAFFOLD_TEMPLATE = """# Compilation request template for kotlin-compile-tester.
# Replace every <REQUIRED> placeholder before running compile.
# Remove <OPTIONAL> entries you do not need. Relative paths are resolved
# against the directory of this file.

# Sources are staged below <working_dir>/sources, classes go to <working_dir>/classes.
working_dir: "<REQUIRED>"

sources:
  # Give each source either inline contents or a file to copy.
  - path: "<REQUIRED>"
    contents: |
      fun main() = println("<OPTIONAL>")
  # - path: "<OPTIONAL>"
  #   file: "<OPTIONAL>"

classpaths:
  - "<OPTIONAL>"

# Service registrations enable kapt; implementations are listed in the given order.
services:
  - service: "javax.annotation.processing.Processor"
    implementation: "<OPTIONAL>"

# Annotation processor options, passed to kapt as apoptions.
kapt_args:
  "<OPTIONAL>": "<OPTIONAL>"

free_args:
  - "<OPTIONAL>"

# Leave jdk_home empty to compile with -no-jdk.
jdk_home: "<OPTIONAL>"

# Each archive is "auto" (search the host classpath), "skip", or a path.
archives:
  kotlin_stdlib: auto
  kotlin_stdlib_common: auto
  kotlin_stdlib_jdk: auto
  kotlin_reflect: auto
  kotlin_script_runtime: auto
  tools_jar: auto
  kapt3_jar: auto

plugins:
  classpaths:
    - "<OPTIONAL>"
  options:
    - "plugin:<OPTIONAL>:<OPTIONAL>=<OPTIONAL>"

compiler:
  # Defaults to $KOTLIN_HOME/bin/kotlinc or kotlinc on PATH.
  command:
    - "<OPTIONAL>"

options:
  inherit_classpath: false
  jvm_target: "<OPTIONAL>"
  correct_error_types: true
  skip_runtime_version_check: false
  verbose: false
  suppress_warnings: false
  all_warnings_as_errors: false
  report_output_files: false
  report_performance: false
  load_builtins_from_dependencies: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML compilation request template with placeholders and inline guidance."""
    return _REQUEST_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder compilation request template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Request file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
