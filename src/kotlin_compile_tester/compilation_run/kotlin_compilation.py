"""Compilation use-case service."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from kotlin_compile_tester.annotation_processing.kapt_plugin import (
    KaptPluginConfig,
    configure_kapt,
)
from kotlin_compile_tester.compiler_arguments import (
    CompilerArguments,
    build_classpath,
    compose_arguments,
)
from kotlin_compile_tester.configuration.request_settings import CompilationRequest
from kotlin_compile_tester.dependency_resolution import (
    ClasspathResolver,
    SupportingArchiveResolver,
    is_jdk9_or_later,
)
from kotlin_compile_tester.service_registry import package_services

from .compilation_log import CompilationLog
from .compiler_invoker import CompilerEntryPoint, KotlincProcess
from .diagnostics import (
    KNOWN_FAILURE_RULES,
    DiagnosticContext,
    DiagnosticRule,
    TeeMessageSink,
    collect_advisories,
)
from .run_contracts import CompilationResult, RunState


class CompilationRunError(Exception):
    """Raised when the inputs of a compilation cannot be written to disk."""


class KotlinCompilation:
    """Stage, compose and run one compilation described by a request.

    Two compilations must not share a working directory at the same time.
    The compiler call blocks until it returns; there is no timeout.
    """

    def __init__(
        self,
        request: CompilationRequest,
        *,
        system_out: TextIO | None = None,
        compiler: CompilerEntryPoint | None = None,
        classpath_resolver: ClasspathResolver | None = None,
        rules: Sequence[DiagnosticRule] = KNOWN_FAILURE_RULES,
    ) -> None:
        self._request = request
        self._system_out = system_out
        self._log = CompilationLog(system_out, verbose=request.verbose)
        self._compiler = compiler or KotlincProcess(request.compiler_command or None)
        self._archives = SupportingArchiveResolver(
            request.archives,
            classpath_resolver=classpath_resolver,
            log=self._log.log,
        )
        self._rules = tuple(rules)
        self._state = RunState.UNSTARTED

    @property
    def request(self) -> CompilationRequest:
        return self._request

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def archives(self) -> SupportingArchiveResolver:
        return self._archives

    def classpath(self) -> tuple[str, ...]:
        """Explicit entries, then found runtime archives, then the inherited host classpath."""
        host_entries: tuple[Path, ...] = ()
        if self._request.inherit_classpath:
            host_entries = self._archives.host_classpath
            self._log.log(
                "Inheriting classpaths:  " + os.pathsep.join(str(entry) for entry in host_entries)
            )
        return build_classpath(
            self._request.classpaths, self._archives.classpath_archives(), host_entries
        )

    def kapt_config(self) -> KaptPluginConfig | None:
        """Return the kapt plugin configuration, or None when no services are given.

        Raises:
          ConfigurationError: If services are given but no kapt3 jar is available.
        """
        if not self._request.uses_annotation_processing:
            return None
        request = self._request
        return configure_kapt(
            self._archives.kapt3_jar,
            self._archives.tools_jar,
            sources_dir=request.kapt_sources_dir,
            classes_dir=request.kapt_classes_dir,
            stubs_dir=request.kapt_stubs_dir,
            services_jar=request.services_jar,
            correct_error_types=request.correct_error_types,
            extra_options=request.kapt_args,
        )

    def compose(self) -> CompilerArguments:
        """Compose compiler arguments from the current contents of the sources directory."""
        return compose_arguments(
            self._request, self.classpath(), self.kapt_config(), log=self._log.log
        )

    def run(self) -> CompilationResult:
        """Run the compilation and return its exit classification.

        `state` becomes COMPLETED once the compiler call returns or raises.

        Raises:
          ConfigurationError: If the request cannot be turned into valid compiler
            arguments. Nothing is staged in that case.
          CompilationRunError: If sources or the services jar cannot be written.
          CompilerNotFoundError: If the default compiler launcher is missing.
        """
        request = self._request
        self._state = RunState.UNSTARTED
        kapt_config = self.kapt_config()
        if kapt_config is not None:
            self._warn_about_tools_jar_on_modern_jdk()
        self._write_inputs()
        self._state = RunState.STAGED

        arguments = compose_arguments(request, self.classpath(), kapt_config, log=self._log.log)
        sink = TeeMessageSink(self._system_out)
        self._state = RunState.RUNNING
        try:
            exit_code = self._compiler.execute(arguments, sink)
        finally:
            self._state = RunState.COMPLETED

        messages = sink.text()
        context = DiagnosticContext(inherit_classpath=request.inherit_classpath)
        for advice in collect_advisories(self._rules, exit_code, messages, context):
            self._log.warning(advice)
        return CompilationResult(
            exit_code=exit_code,
            classes_dir=request.classes_dir,
            messages=messages,
        )

    def _write_inputs(self) -> None:
        request = self._request
        try:
            if request.uses_annotation_processing:
                package_services(request.services, request.services_jar)
            for source in request.sources:
                source.write_to(request.sources_dir)
        except OSError as exc:
            raise CompilationRunError(f"Failed to write compilation inputs: {exc}") from exc

    def _warn_about_tools_jar_on_modern_jdk(self) -> None:
        tools_jar = self._archives.tools_jar
        jdk_home = self._request.jdk_home
        if tools_jar is not None and jdk_home is not None and is_jdk9_or_later(jdk_home):
            self._log.log(
                f"A tools.jar ({tools_jar}) is used with the JDK 9+ at {jdk_home}. "
                "This usually fails with an internal compiler error."
            )


def execute_compilation(
    request: CompilationRequest,
    *,
    system_out: TextIO | None = None,
    compiler: CompilerEntryPoint | None = None,
    classpath_resolver: ClasspathResolver | None = None,
) -> CompilationResult:
    """Run one compilation described by `request` and return its result."""
    compilation = KotlinCompilation(
        request,
        system_out=system_out,
        compiler=compiler,
        classpath_resolver=classpath_resolver,
    )
    return compilation.run()
