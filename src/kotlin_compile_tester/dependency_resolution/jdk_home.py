"""JDK home inspection helpers."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

_JAVA_VERSION_LINE = re.compile(r'^JAVA_VERSION="?([^"\s]+)"?\s*$', re.MULTILINE)


class JdkHomeError(Exception):
    """Raised when a JDK home or one of its files cannot be found."""


def get_java_home(environ: Mapping[str, str] | None = None) -> Path:
    """Return the JDK referenced by `JAVA_HOME`."""
    env = os.environ if environ is None else environ
    raw_path = env.get("JAVA_HOME", "").strip()
    if not raw_path:
        raise JdkHomeError("JAVA_HOME is not set.")
    java_home = Path(raw_path)
    if not java_home.is_dir():
        raise JdkHomeError(f"JAVA_HOME is not a directory: {java_home}")
    return java_home


def find_tools_jar_from_jdk(jdk_home: Path) -> Path:
    """Find the tools.jar of a JDK 8 (or earlier) whose `jre` directory is `jdk_home`."""
    tools_jar = (jdk_home / ".." / "lib" / "tools.jar").resolve()
    if not tools_jar.is_file():
        raise JdkHomeError(f"tools.jar not found for JDK home {jdk_home}: {tools_jar}")
    return tools_jar


def jdk_major_version(jdk_home: Path) -> int | None:
    """Read the major Java version from the `release` file of a JDK.

    Legacy version strings (``1.8.0_292``) map to their second component.
    Returns None when the file is missing or unparsable.
    """
    release_file = jdk_home / "release"
    try:
        text = release_file.read_text(encoding="utf-8")
    except OSError:
        return None
    match = _JAVA_VERSION_LINE.search(text)
    if match is None:
        return None
    components = re.split(r"[._+-]", match.group(1))
    try:
        major = int(components[0])
        if major == 1 and len(components) > 1:
            major = int(components[1])
    except ValueError:
        return None
    return major


def is_jdk9_or_later(jdk_home: Path) -> bool:
    major = jdk_major_version(jdk_home)
    return major is not None and major >= 9
