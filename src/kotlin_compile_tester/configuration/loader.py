"""Compilation request file loader."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .configuration_errors import ConfigurationError
from .request_settings import (
    AUTO,
    ArchiveSetting,
    CompilationRequest,
    ServiceBinding,
    SourceFile,
    SupportingArchives,
)

_ARCHIVE_FIELDS = (
    "kotlin_stdlib",
    "kotlin_stdlib_common",
    "kotlin_stdlib_jdk",
    "kotlin_reflect",
    "kotlin_script_runtime",
    "tools_jar",
    "kapt3_jar",
)
_BOOLEAN_OPTIONS = {
    "inherit_classpath": False,
    "correct_error_types": True,
    "skip_runtime_version_check": False,
    "verbose": False,
    "suppress_warnings": False,
    "all_warnings_as_errors": False,
    "report_output_files": False,
    "report_performance": False,
    "load_builtins_from_dependencies": False,
}


def load_request(request_path: Path | str) -> CompilationRequest:
    """Load and validate a YAML or JSON compilation request file.

    Relative paths inside the file are resolved against the file's directory.
    """
    path = Path(request_path)
    if not path.exists():
        raise ConfigurationError(f"Request file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse request file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Request root must be a mapping.")

    base_path = path.resolve().parent
    working_dir = _resolve_path(
        base_path, _require_non_empty_string(parsed.get("working_dir"), "working_dir")
    )
    options = _optional_mapping(parsed.get("options"), "options")
    plugins = _optional_mapping(parsed.get("plugins"), "plugins")
    compiler = _optional_mapping(parsed.get("compiler"), "compiler")

    return CompilationRequest(
        working_dir=working_dir,
        sources=_parse_sources(parsed.get("sources"), base_path),
        classpaths=tuple(
            _resolve_path(base_path, entry)
            for entry in _normalize_string_sequence(parsed.get("classpaths"), "classpaths")
        ),
        services=_parse_services(parsed.get("services")),
        kapt_args=_parse_string_mapping(parsed.get("kapt_args"), "kapt_args"),
        free_args=_normalize_string_sequence(parsed.get("free_args"), "free_args"),
        jdk_home=_optional_path(parsed.get("jdk_home"), "jdk_home", base_path),
        archives=_parse_archives(parsed.get("archives"), base_path),
        plugin_classpaths=tuple(
            str(_resolve_path(base_path, entry))
            for entry in _normalize_string_sequence(plugins.get("classpaths"), "plugins.classpaths")
        ),
        plugin_options=_normalize_string_sequence(plugins.get("options"), "plugins.options"),
        compiler_command=_normalize_string_sequence(compiler.get("command"), "compiler.command"),
        jvm_target=_optional_string(options.get("jvm_target"), "options.jvm_target"),
        **{
            name: _optional_bool(options.get(name), f"options.{name}", default)
            for name, default in _BOOLEAN_OPTIONS.items()
        },
    )


def _parse_sources(value: Any, base_path: Path) -> tuple[SourceFile, ...]:
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigurationError("sources must be a list.")
    sources = []
    for index, item in enumerate(value):
        label = f"sources[{index}]"
        section = _require_mapping(item, label)
        source_path = _require_non_empty_string(section.get("path"), f"{label}.path")
        contents = section.get("contents")
        file_value = section.get("file")
        if contents is not None and file_value is not None:
            raise ConfigurationError(f"{label} must not set both contents and file.")
        if file_value is not None:
            source_file = _resolve_path(
                base_path, _require_non_empty_string(file_value, f"{label}.file")
            )
            if not source_file.is_file():
                raise ConfigurationError(f"{label}.file not found: {source_file}")
            contents = source_file.read_text(encoding="utf-8")
        if not isinstance(contents, str):
            raise ConfigurationError(f"{label} requires either contents or file.")
        sources.append(SourceFile(path=source_path, contents=contents))
    return tuple(sources)


def _parse_services(value: Any) -> tuple[ServiceBinding, ...]:
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigurationError("services must be a list.")
    bindings = []
    for index, item in enumerate(value):
        label = f"services[{index}]"
        section = _require_mapping(item, label)
        bindings.append(
            ServiceBinding(
                service_interface=_require_non_empty_string(
                    section.get("service"), f"{label}.service"
                ),
                implementation=_require_non_empty_string(
                    section.get("implementation"), f"{label}.implementation"
                ),
            )
        )
    return tuple(bindings)


def _parse_archives(value: Any, base_path: Path) -> SupportingArchives:
    section = _optional_mapping(value, "archives")
    unknown = sorted(set(section) - set(_ARCHIVE_FIELDS))
    if unknown:
        raise ConfigurationError(f"Unknown archives entries: {', '.join(map(str, unknown))}")
    settings: dict[str, ArchiveSetting] = {}
    for name in _ARCHIVE_FIELDS:
        if name not in section:
            continue
        raw_value = section[name]
        if raw_value is None or raw_value == "skip":
            settings[name] = None
        elif raw_value == "auto":
            settings[name] = AUTO
        else:
            settings[name] = _resolve_path(
                base_path, _require_non_empty_string(raw_value, f"archives.{name}")
            )
    return SupportingArchives(**settings)


def _parse_string_mapping(value: Any, field_name: str) -> dict[str, str]:
    section = _optional_mapping(value, field_name)
    parsed: dict[str, str] = {}
    for key, item in section.items():
        if not isinstance(key, str) or not key:
            raise ConfigurationError(f"{field_name} keys must be non-empty strings.")
        if not isinstance(item, str | int | float | bool):
            raise ConfigurationError(f"{field_name}.{key} must be a scalar value.")
        parsed[key] = str(item).lower() if isinstance(item, bool) else str(item)
    return parsed


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_path(value: Any, field_name: str, base_path: Path) -> Path | None:
    raw_path = _optional_string(value, field_name)
    return None if raw_path is None else _resolve_path(base_path, raw_path)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Request section '{section_name}' must be a mapping.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    return _require_mapping(value, section_name)


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, int | float) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value
