"""Diagnostics capture and classification of known hard-to-debug compiler failures."""

from __future__ import annotations

import io
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, TextIO

from .run_contracts import ExitCode


class TeeMessageSink:
    """Duplicate every compiler message to the caller stream and an in-memory buffer."""

    def __init__(self, system_out: TextIO | None = None) -> None:
        self._system_out = system_out
        self._buffer = io.StringIO()

    def write(self, text: str) -> None:
        self._buffer.write(text)
        if self._system_out is not None:
            self._system_out.write(text)
            self._system_out.flush()

    def text(self) -> str:
        return self._buffer.getvalue()


@dataclass(frozen=True)
class DiagnosticContext:
    """Request facts a rule may use to phrase its advice."""

    inherit_classpath: bool


class DiagnosticRule(Protocol):  # pylint: disable=too-few-public-methods
    """Post-processing rule over the captured compiler output."""

    def advise(self, exit_code: ExitCode, messages: str, context: DiagnosticContext) -> str | None:
        """Return a warning when the rule recognizes the failure, else None."""


class ToolsJarOnModernJdkRule:  # pylint: disable=too-few-public-methods
    """Recognize the crash caused by a JDK 8 tools.jar combined with JDK 9 or later."""

    SIGNATURE = "No enum constant com.sun.tools.javac.main.Option.BOOT_CLASS_PATH"

    def advise(self, exit_code: ExitCode, messages: str, context: DiagnosticContext) -> str | None:
        if exit_code != ExitCode.INTERNAL_ERROR or self.SIGNATURE not in messages:
            return None
        advice = (
            "KotlinCompilation has detected that the compilation failed with an error "
            "that may be caused by including a tools.jar file together with a JDK of "
            "version 9 or later."
        )
        if context.inherit_classpath:
            advice += (
                " Make sure that no tools.jar (or unwanted JDK) is in the inherited classpath."
            )
        return advice


KNOWN_FAILURE_RULES: tuple[DiagnosticRule, ...] = (ToolsJarOnModernJdkRule(),)


def collect_advisories(
    rules: Sequence[DiagnosticRule],
    exit_code: ExitCode,
    messages: str,
    context: DiagnosticContext,
) -> list[str]:
    """Apply every rule; the exit classification itself is never changed."""
    advisories = []
    for rule in rules:
        advice = rule.advise(exit_code, messages, context)
        if advice:
            advisories.append(advice)
    return advisories
