"""Dependency resolution exports."""

from .classpath_locator import (
    KAPT3,
    KOTLIN_REFLECT,
    KOTLIN_SCRIPT_RUNTIME,
    KOTLIN_STDLIB,
    KOTLIN_STDLIB_COMMON,
    KOTLIN_STDLIB_JDK,
    TOOLS_JAR,
    ArchivePattern,
    ClasspathResolver,
    SupportingArchiveResolver,
    host_classpath_entries,
    locate,
)
from .jdk_home import (
    JdkHomeError,
    find_tools_jar_from_jdk,
    get_java_home,
    is_jdk9_or_later,
    jdk_major_version,
)

__all__ = [
    "ArchivePattern",
    "ClasspathResolver",
    "SupportingArchiveResolver",
    "host_classpath_entries",
    "locate",
    "KAPT3",
    "KOTLIN_REFLECT",
    "KOTLIN_SCRIPT_RUNTIME",
    "KOTLIN_STDLIB",
    "KOTLIN_STDLIB_COMMON",
    "KOTLIN_STDLIB_JDK",
    "TOOLS_JAR",
    "JdkHomeError",
    "find_tools_jar_from_jdk",
    "get_java_home",
    "is_jdk9_or_later",
    "jdk_major_version",
]
