"""Compiler argument entities."""

from __future__ import annotations

from dataclasses import dataclass

from kotlin_compile_tester.annotation_processing.kapt_plugin import PluginOption


@dataclass(frozen=True)
class CompilerArguments:  # pylint: disable=too-many-instance-attributes
    """Fully assembled K2JVM compiler arguments."""

    free_args: tuple[str, ...] = ()
    plugin_classpaths: tuple[str, ...] = ()
    plugin_options: tuple[PluginOption, ...] = ()
    destination: str | None = None
    classpath: str = ""
    jdk_home: str | None = None
    no_jdk: bool = False
    no_stdlib: bool = False
    no_reflect: bool = False
    jvm_target: str | None = None
    verbose: bool = False
    skip_runtime_version_check: bool = False
    suppress_warnings: bool = False
    all_warnings_as_errors: bool = False
    report_output_files: bool = False
    report_perf: bool = False
    load_builtins_from_dependencies: bool = False

    def to_command_line(self) -> list[str]:
        """Render the arguments in kotlinc command line form, free arguments last."""
        command: list[str] = []
        if self.destination is not None:
            command += ["-d", self.destination]
        if self.classpath:
            command += ["-classpath", self.classpath]
        if self.jdk_home is not None:
            command += ["-jdk-home", self.jdk_home]
        flags = (
            (self.no_jdk, "-no-jdk"),
            (self.no_stdlib, "-no-stdlib"),
            (self.no_reflect, "-no-reflect"),
        )
        command += [flag for enabled, flag in flags if enabled]
        if self.jvm_target is not None:
            command += ["-jvm-target", self.jvm_target]
        option_flags = (
            (self.verbose, "-verbose"),
            (self.skip_runtime_version_check, "-Xskip-runtime-version-check"),
            (self.suppress_warnings, "-nowarn"),
            (self.all_warnings_as_errors, "-Werror"),
            (self.report_output_files, "-Xreport-output-files"),
            (self.report_perf, "-Xreport-perf"),
            (self.load_builtins_from_dependencies, "-Xload-builtins-from-dependencies"),
        )
        command += [flag for enabled, flag in option_flags if enabled]
        command += [f"-Xplugin={entry}" for entry in self.plugin_classpaths]
        for option in self.plugin_options:
            command += ["-P", option.render()]
        command += self.free_args
        return command
