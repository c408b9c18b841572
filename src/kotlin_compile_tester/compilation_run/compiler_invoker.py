"""Invocation of the external Kotlin/JVM compiler."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from kotlin_compile_tester.compiler_arguments.argument_models import CompilerArguments

from .diagnostics import TeeMessageSink
from .run_contracts import ExitCode


class CompilerNotFoundError(Exception):
    """Raised when no kotlinc launcher can be found or started."""


class CompilerEntryPoint(Protocol):  # pylint: disable=too-few-public-methods
    """Entry point that runs one compilation and reports its exit classification."""

    def execute(self, arguments: CompilerArguments, sink: TeeMessageSink) -> ExitCode: ...


def detect_kotlinc_command(environ: Mapping[str, str] | None = None) -> tuple[str, ...]:
    """Locate the kotlinc launcher via `KOTLIN_HOME` or `PATH`."""
    env = os.environ if environ is None else environ
    launcher_name = "kotlinc.bat" if sys.platform.startswith("win") else "kotlinc"
    kotlin_home = env.get("KOTLIN_HOME")
    if kotlin_home:
        launcher = Path(kotlin_home) / "bin" / launcher_name
        if launcher.is_file():
            return (str(launcher),)
    found = shutil.which(launcher_name, path=env.get("PATH"))
    if found is None:
        raise CompilerNotFoundError(
            "kotlinc was not found. Set KOTLIN_HOME or add kotlinc to PATH."
        )
    return (found,)


class KotlincProcess:  # pylint: disable=too-few-public-methods
    """Run kotlinc as a child process and stream its output into a message sink."""

    def __init__(
        self,
        command: Sequence[str] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._command = tuple(command) if command else None
        self._environ = environ

    def execute(self, arguments: CompilerArguments, sink: TeeMessageSink) -> ExitCode:
        launcher = self._command or detect_kotlinc_command(self._environ)
        command = [*launcher, *arguments.to_command_line()]
        try:
            with subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                env=None if self._environ is None else dict(self._environ),
            ) as process:
                if process.stdout is not None:
                    for line in process.stdout:
                        sink.write(line)
                status = process.wait()
        except FileNotFoundError as exc:
            raise CompilerNotFoundError(
                f"Compiler command not found: {shlex.join(launcher)}"
            ) from exc
        return ExitCode.from_process_status(status)
