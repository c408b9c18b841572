"""Compilation run exports."""

from .compiler_invoker import (
    CompilerEntryPoint,
    CompilerNotFoundError,
    KotlincProcess,
    detect_kotlinc_command,
)
from .diagnostics import (
    KNOWN_FAILURE_RULES,
    DiagnosticContext,
    DiagnosticRule,
    TeeMessageSink,
    ToolsJarOnModernJdkRule,
    collect_advisories,
)
from .kotlin_compilation import CompilationRunError, KotlinCompilation, execute_compilation
from .run_contracts import CompilationResult, ExitCode, RunState

__all__ = [
    "CompilationResult",
    "CompilationRunError",
    "CompilerEntryPoint",
    "CompilerNotFoundError",
    "DiagnosticContext",
    "DiagnosticRule",
    "ExitCode",
    "KNOWN_FAILURE_RULES",
    "KotlinCompilation",
    "KotlincProcess",
    "RunState",
    "TeeMessageSink",
    "ToolsJarOnModernJdkRule",
    "collect_advisories",
    "detect_kotlinc_command",
    "execute_compilation",
]
