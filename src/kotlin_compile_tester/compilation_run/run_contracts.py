"""Compilation run entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ExitCode(str, Enum):
    """Exit classification reported by the compiler."""

    OK = "ok"
    COMPILATION_ERROR = "compilation_error"
    INTERNAL_ERROR = "internal_error"
    SCRIPT_EXECUTION_ERROR = "script_execution_error"
    FAILURE = "failure"

    @staticmethod
    def from_process_status(status: int) -> ExitCode:
        """Map a kotlinc process exit status; unknown statuses are a generic failure."""
        return _EXIT_CODES_BY_STATUS.get(status, ExitCode.FAILURE)


_EXIT_CODES_BY_STATUS = {
    0: ExitCode.OK,
    1: ExitCode.COMPILATION_ERROR,
    2: ExitCode.INTERNAL_ERROR,
    3: ExitCode.SCRIPT_EXECUTION_ERROR,
}


class RunState(str, Enum):
    """Lifecycle of one compilation run."""

    UNSTARTED = "unstarted"
    STAGED = "staged"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class CompilationResult:
    """Outcome of one compilation."""

    exit_code: ExitCode
    classes_dir: Path
    messages: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == ExitCode.OK
