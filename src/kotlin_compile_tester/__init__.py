"""Programmatic Kotlin/JVM compilation for test suites."""

import logging

from .compilation_run import (
    CompilationResult,
    CompilationRunError,
    CompilerNotFoundError,
    ExitCode,
    KotlinCompilation,
    execute_compilation,
)
from .configuration import (
    AUTO,
    CompilationRequest,
    ConfigurationError,
    ServiceBinding,
    SourceFile,
    SupportingArchives,
    load_request,
)

logging.getLogger("kotlin_compile_tester").addHandler(logging.NullHandler())

__all__ = [
    "AUTO",
    "CompilationRequest",
    "CompilationResult",
    "CompilationRunError",
    "CompilerNotFoundError",
    "ConfigurationError",
    "ExitCode",
    "KotlinCompilation",
    "ServiceBinding",
    "SourceFile",
    "SupportingArchives",
    "execute_compilation",
    "load_request",
]
