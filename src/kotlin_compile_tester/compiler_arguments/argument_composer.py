"""Composition of compiler arguments from a compilation request."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

from kotlin_compile_tester.annotation_processing.kapt_plugin import KaptPluginConfig, PluginOption
from kotlin_compile_tester.configuration.configuration_errors import ConfigurationError
from kotlin_compile_tester.configuration.request_settings import CompilationRequest

from .argument_models import CompilerArguments

LogFunction = Callable[[str], None]


def build_classpath(
    explicit: Iterable[Path],
    archives: Iterable[Path],
    host_entries: Iterable[Path] = (),
) -> tuple[str, ...]:
    """Concatenate classpath parts as absolute paths, keeping the first occurrence of each."""
    ordered = [*explicit, *archives, *host_entries]
    return tuple(dict.fromkeys(os.path.abspath(entry) for entry in ordered))


def list_staged_sources(sources_dir: Path) -> list[str]:
    """Return the top-level entries of the sources directory sorted by name."""
    if not sources_dir.is_dir():
        return []
    return [str(entry.absolute()) for entry in sorted(sources_dir.iterdir(), key=lambda e: e.name)]


def compose_arguments(
    request: CompilationRequest,
    classpath: Iterable[str],
    kapt_config: KaptPluginConfig | None = None,
    *,
    log: LogFunction | None = None,
) -> CompilerArguments:
    """Merge the request, resolved classpath and kapt configuration into compiler arguments.

    Raises:
      ConfigurationError: If annotation processing is requested without a kapt
        configuration, or a caller supplied plugin option is malformed.
    """
    plugin_classpaths = tuple(request.plugin_classpaths)
    plugin_options = tuple(PluginOption.parse(option) for option in request.plugin_options)
    if request.uses_annotation_processing:
        if kapt_config is None:
            raise ConfigurationError("Services were given but kapt is not configured.")
        plugin_classpaths += kapt_config.plugin_classpaths
        plugin_options += kapt_config.plugin_options
    elif log is not None:
        log("No services were given. Not including kapt in the compiler's plugins.")

    if request.jdk_home is None and log is not None:
        log("Using option -no-jdk. Kotlinc won't look for a JDK.")

    # stdlib and reflect are put on the classpath explicitly when needed,
    # the compiler must never look them up on its own.
    return CompilerArguments(
        free_args=(*list_staged_sources(request.sources_dir), *request.free_args),
        plugin_classpaths=plugin_classpaths,
        plugin_options=plugin_options,
        destination=str(request.classes_dir.absolute()),
        classpath=os.pathsep.join(classpath),
        jdk_home=str(request.jdk_home.absolute()) if request.jdk_home is not None else None,
        no_jdk=request.jdk_home is None,
        no_stdlib=True,
        no_reflect=True,
        jvm_target=request.jvm_target,
        verbose=request.verbose,
        skip_runtime_version_check=request.skip_runtime_version_check,
        suppress_warnings=request.suppress_warnings,
        all_warnings_as_errors=request.all_warnings_as_errors,
        report_output_files=request.report_output_files,
        report_perf=request.report_performance,
        load_builtins_from_dependencies=request.load_builtins_from_dependencies,
    )
