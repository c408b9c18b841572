"""Caller-visible logging for compilation runs."""

from __future__ import annotations

import logging
from typing import TextIO

_LOGGER = logging.getLogger("kotlin_compile_tester")


class CompilationLog:
    """Write helpful information to the caller's stream and the package logger.

    Informational lines are only emitted when `verbose` is set; warnings are
    always emitted.
    """

    def __init__(self, system_out: TextIO | None, *, verbose: bool) -> None:
        self._system_out = system_out
        self._verbose = verbose

    def log(self, message: str) -> None:
        if not self._verbose:
            return
        _LOGGER.info(message)
        self._print(f"logging: {message}")

    def warning(self, message: str) -> None:
        _LOGGER.warning(message)
        self._print(f"warning: {message}")

    def _print(self, line: str) -> None:
        if self._system_out is not None:
            print(line, file=self._system_out)
