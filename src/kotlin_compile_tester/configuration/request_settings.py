"""Compilation request domain entities."""

from __future__ import annotations

import posixpath
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Literal

from .configuration_errors import ConfigurationError

_JAVA_IDENTIFIER = r"[A-Za-z_$][A-Za-z0-9_$]*"
_QUALIFIED_NAME_PATTERN = re.compile(rf"^{_JAVA_IDENTIFIER}(?:\.{_JAVA_IDENTIFIER})*$")
_ANONYMOUS_OR_LOCAL_SEGMENT = re.compile(r"\$\d")


class ArchiveResolution(str, Enum):
    """Marker for supporting archives that are searched on the host classpath."""

    AUTO = "auto"


AUTO = ArchiveResolution.AUTO

ArchiveSetting = Literal[ArchiveResolution.AUTO] | Path | None


@dataclass(frozen=True)
class SourceFile:
    """A Kotlin (or Java) source file that only exists as data until staged."""

    path: str
    contents: str

    def __post_init__(self) -> None:
        if not self.path or not self.path.strip():
            raise ConfigurationError("Source file path must not be empty.")
        normalized = posixpath.normpath(self.path.replace("\\", "/"))
        if PurePosixPath(normalized).is_absolute() or Path(self.path).is_absolute():
            raise ConfigurationError(f"Source file path must be relative: {self.path}")
        if normalized in (".", ""):
            raise ConfigurationError(f"Source file path must name a file: {self.path}")
        if normalized == ".." or normalized.startswith("../"):
            raise ConfigurationError(
                f"Source file path escapes the sources directory: {self.path}"
            )

    def write_to(self, directory: Path) -> Path:
        """Write the source below `directory` and return the written file."""
        destination = directory / self.path
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(self.contents, encoding="utf-8")
        return destination


@dataclass(frozen=True)
class ServiceBinding:
    """Registration of one implementation class for a JVM service interface."""

    service_interface: str
    implementation: str


def qualified_name(identity: str) -> str:
    """Resolve a JVM class identity to the name written into service registrations.

    Raises:
      ConfigurationError: If the identity is blank, malformed, or names an
        anonymous or local class, which have no usable qualified name.
    """
    if not isinstance(identity, str):
        raise ConfigurationError(f"Class identity must be a string: {identity!r}")
    name = identity.strip()
    if not _QUALIFIED_NAME_PATTERN.match(name):
        raise ConfigurationError(f"'{identity}' is not a fully-qualified class name.")
    if _ANONYMOUS_OR_LOCAL_SEGMENT.search(name):
        raise ConfigurationError(
            f"'{identity}' is an anonymous or local class and has no qualified name."
        )
    return name


@dataclass(frozen=True)
class SupportingArchives:  # pylint: disable=too-many-instance-attributes
    """Runtime archives placed on the compiler or plugin classpath.

    Each field is a path to use as given, `None` to skip the archive, or
    `AUTO` to search the host classpath on first use.
    """

    kotlin_stdlib: ArchiveSetting = AUTO
    kotlin_stdlib_common: ArchiveSetting = AUTO
    kotlin_stdlib_jdk: ArchiveSetting = AUTO
    kotlin_reflect: ArchiveSetting = AUTO
    kotlin_script_runtime: ArchiveSetting = AUTO
    tools_jar: ArchiveSetting = AUTO
    kapt3_jar: ArchiveSetting = AUTO


@dataclass(frozen=True)
class CompilationRequest:  # pylint: disable=too-many-instance-attributes
    """Complete, immutable configuration of one compilation."""

    working_dir: Path
    sources: tuple[SourceFile, ...] = ()
    classpaths: tuple[Path, ...] = ()
    services: tuple[ServiceBinding, ...] = ()
    kapt_args: Mapping[str, str] = field(default_factory=dict)
    free_args: tuple[str, ...] = ()
    jdk_home: Path | None = None
    archives: SupportingArchives = field(default_factory=SupportingArchives)
    plugin_classpaths: tuple[str, ...] = ()
    plugin_options: tuple[str, ...] = ()
    compiler_command: tuple[str, ...] = ()
    inherit_classpath: bool = False
    jvm_target: str | None = None
    correct_error_types: bool = True
    skip_runtime_version_check: bool = False
    verbose: bool = False
    suppress_warnings: bool = False
    all_warnings_as_errors: bool = False
    report_output_files: bool = False
    report_performance: bool = False
    load_builtins_from_dependencies: bool = False

    @property
    def sources_dir(self) -> Path:
        return self.working_dir / "sources"

    @property
    def classes_dir(self) -> Path:
        return self.working_dir / "classes"

    @property
    def services_jar(self) -> Path:
        return self.working_dir / "services.jar"

    @property
    def kapt_sources_dir(self) -> Path:
        return self.working_dir / "kapt" / "sources"

    @property
    def kapt_stubs_dir(self) -> Path:
        return self.working_dir / "kapt" / "stubs"

    @property
    def kapt_classes_dir(self) -> Path:
        return self.working_dir / "kapt" / "classes"

    @property
    def uses_annotation_processing(self) -> bool:
        """Return True when kapt has to be enabled for this request."""
        return bool(self.services)
