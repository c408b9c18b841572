"""Supporting archive discovery on the host classpath."""

from __future__ import annotations

import os
import re
import shutil
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from kotlin_compile_tester.configuration.request_settings import (
    AUTO,
    ArchiveSetting,
    SupportingArchives,
)

LogFunction = Callable[[str], None]
ClasspathResolver = Callable[[], Sequence[Path]]

_VERSION = r"(-[0-9]+\.[0-9]+\.[0-9]+(?:-[A-Za-z0-9.]+)?)?"


@dataclass(frozen=True)
class ArchivePattern:
    """File name pattern of one supporting archive."""

    short_name: str
    regex: re.Pattern[str]

    def matches(self, candidate: Path) -> bool:
        return self.regex.fullmatch(candidate.name) is not None


KOTLIN_STDLIB = ArchivePattern("kotlin-stdlib.jar", re.compile(rf"kotlin-stdlib{_VERSION}\.jar"))
KOTLIN_STDLIB_COMMON = ArchivePattern(
    "kotlin-stdlib-common.jar", re.compile(rf"kotlin-stdlib-common{_VERSION}\.jar")
)
KOTLIN_STDLIB_JDK = ArchivePattern(
    "kotlin-stdlib-jdk*.jar", re.compile(rf"kotlin-stdlib-jdk[0-9]+{_VERSION}\.jar")
)
KOTLIN_REFLECT = ArchivePattern("kotlin-reflect.jar", re.compile(rf"kotlin-reflect{_VERSION}\.jar"))
KOTLIN_SCRIPT_RUNTIME = ArchivePattern(
    "kotlin-script-runtime.jar", re.compile(rf"kotlin-script-runtime{_VERSION}\.jar")
)
KAPT3 = ArchivePattern(
    "kotlin-annotation-processing(-embeddable).jar",
    re.compile(rf"kotlin-annotation-processing(-embeddable)?{_VERSION}\.jar"),
)
TOOLS_JAR = ArchivePattern("tools.jar", re.compile(r"tools\.jar"))


def locate(
    candidates: Iterable[Path],
    pattern: ArchivePattern,
    log: LogFunction | None = None,
) -> Path | None:
    """Return the first candidate whose file name matches `pattern`.

    Only the file name is inspected; the archive contents are not validated.
    """
    found = next((candidate for candidate in candidates if pattern.matches(candidate)), None)
    if log is not None:
        if found is None:
            log(f"Searched classpath for {pattern.short_name} but didn't find anything.")
        else:
            log(f"Searched classpath for {pattern.short_name} and found: {found}")
    return found


def host_classpath_entries(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Enumerate the classpath visible to JVM tools launched from this process.

    Entries of `CLASSPATH` come first (a trailing `*` expands to the jars of
    that directory), followed by the jars shipped in the Kotlin compiler
    distribution (`$KOTLIN_HOME/lib` or the `lib` next to `kotlinc` on PATH).
    Duplicates are removed by absolute path, first occurrence wins.
    """
    env = os.environ if environ is None else environ
    entries: list[Path] = []
    for raw_entry in env.get("CLASSPATH", "").split(os.pathsep):
        entries.extend(_expand_classpath_entry(raw_entry.strip()))

    distribution_lib = _kotlin_distribution_lib(env)
    if distribution_lib is not None:
        entries.extend(sorted(distribution_lib.glob("*.jar")))

    return _distinct_by_absolute_path(entries)


def _expand_classpath_entry(raw_entry: str) -> list[Path]:
    if not raw_entry:
        return []
    if raw_entry == "*" or raw_entry.endswith(("/*", "\\*")):
        directory = Path(raw_entry[:-1] or ".")
        if not directory.is_dir():
            return []
        return sorted(
            candidate
            for candidate in directory.iterdir()
            if candidate.suffix.lower() == ".jar" and candidate.is_file()
        )
    return [Path(raw_entry)]


def _kotlin_distribution_lib(env: Mapping[str, str]) -> Path | None:
    kotlin_home = env.get("KOTLIN_HOME")
    if kotlin_home:
        lib_dir = Path(kotlin_home) / "lib"
        return lib_dir if lib_dir.is_dir() else None
    kotlinc = shutil.which("kotlinc", path=env.get("PATH"))
    if kotlinc is None:
        return None
    lib_dir = Path(kotlinc).resolve().parent.parent / "lib"
    return lib_dir if lib_dir.is_dir() else None


def _distinct_by_absolute_path(entries: Iterable[Path]) -> list[Path]:
    seen: set[str] = set()
    distinct: list[Path] = []
    for entry in entries:
        absolute = os.path.abspath(entry)
        if absolute in seen:
            continue
        seen.add(absolute)
        distinct.append(Path(absolute))
    return distinct


class SupportingArchiveResolver:
    """Resolve supporting archives lazily, consulting the host classpath at most once."""

    def __init__(
        self,
        archives: SupportingArchives,
        *,
        classpath_resolver: ClasspathResolver | None = None,
        log: LogFunction | None = None,
    ) -> None:
        self._archives = archives
        self._classpath_resolver = classpath_resolver or host_classpath_entries
        self._log = log

    @cached_property
    def host_classpath(self) -> tuple[Path, ...]:
        return tuple(self._classpath_resolver())

    @cached_property
    def kotlin_stdlib(self) -> Path | None:
        return self._resolve(self._archives.kotlin_stdlib, KOTLIN_STDLIB)

    @cached_property
    def kotlin_stdlib_common(self) -> Path | None:
        return self._resolve(self._archives.kotlin_stdlib_common, KOTLIN_STDLIB_COMMON)

    @cached_property
    def kotlin_stdlib_jdk(self) -> Path | None:
        return self._resolve(self._archives.kotlin_stdlib_jdk, KOTLIN_STDLIB_JDK)

    @cached_property
    def kotlin_reflect(self) -> Path | None:
        return self._resolve(self._archives.kotlin_reflect, KOTLIN_REFLECT)

    @cached_property
    def kotlin_script_runtime(self) -> Path | None:
        return self._resolve(self._archives.kotlin_script_runtime, KOTLIN_SCRIPT_RUNTIME)

    @cached_property
    def tools_jar(self) -> Path | None:
        return self._resolve(self._archives.tools_jar, TOOLS_JAR)

    @cached_property
    def kapt3_jar(self) -> Path | None:
        return self._resolve(self._archives.kapt3_jar, KAPT3)

    def classpath_archives(self) -> list[Path]:
        """Return the found runtime archives that belong on the compile classpath."""
        candidates = (
            self.kotlin_stdlib,
            self.kotlin_stdlib_common,
            self.kotlin_stdlib_jdk,
            self.kotlin_reflect,
            self.kotlin_script_runtime,
        )
        return [archive for archive in candidates if archive is not None]

    def _resolve(self, setting: ArchiveSetting, pattern: ArchivePattern) -> Path | None:
        if setting is AUTO:
            return locate(self.host_classpath, pattern, self._log)
        return None if setting is None else Path(setting)
