"""Configuration of the kapt compiler plugin."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from kotlin_compile_tester.configuration.configuration_errors import ConfigurationError

from .kapt_options_codec import encode_kapt_options

KAPT_PLUGIN_ID = "org.jetbrains.kotlin.kapt3"
_PLUGIN_OPTION_PREFIX = "plugin:"


class KaptOption(str, Enum):
    """Plugin option names understood by kapt3."""

    SOURCES = "sources"
    CLASSES = "classes"
    STUBS = "stubs"
    AP_CLASSPATH = "apclasspath"
    CORRECT_ERROR_TYPES = "correctErrorTypes"
    APT_MODE = "aptMode"
    AP_OPTIONS = "apoptions"


_KAPT_OPTION_NAMES = frozenset(option.value for option in KaptOption)


@dataclass(frozen=True)
class PluginOption:
    """One `-P plugin:<id>:<key>=<value>` compiler plugin option."""

    plugin_id: str
    key: str
    value: str

    def __post_init__(self) -> None:
        if not self.plugin_id or ":" in self.plugin_id:
            raise ConfigurationError(f"Invalid compiler plugin id: '{self.plugin_id}'")
        if not self.key or ":" in self.key or "=" in self.key:
            raise ConfigurationError(
                f"Invalid option name '{self.key}' for compiler plugin {self.plugin_id}"
            )
        if self.plugin_id == KAPT_PLUGIN_ID and self.key not in _KAPT_OPTION_NAMES:
            raise ConfigurationError(f"Unknown kapt plugin option: '{self.key}'")

    @classmethod
    def parse(cls, text: str) -> PluginOption:
        """Parse an option in its `plugin:<id>:<key>=<value>` command line form."""
        if not text.startswith(_PLUGIN_OPTION_PREFIX):
            raise ConfigurationError(f"Plugin option must start with 'plugin:': '{text}'")
        plugin_id, separator, assignment = text[len(_PLUGIN_OPTION_PREFIX) :].partition(":")
        key, equals, value = assignment.partition("=")
        if not separator or not equals:
            raise ConfigurationError(f"Malformed plugin option: '{text}'")
        return cls(plugin_id=plugin_id, key=key, value=value)

    def render(self) -> str:
        return f"{_PLUGIN_OPTION_PREFIX}{self.plugin_id}:{self.key}={self.value}"


def kapt_option(option: KaptOption, value: str) -> PluginOption:
    return PluginOption(plugin_id=KAPT_PLUGIN_ID, key=option.value, value=value)


@dataclass(frozen=True)
class KaptPluginConfig:
    """Plugin classpath entries and options that enable kapt."""

    plugin_classpaths: tuple[str, ...]
    plugin_options: tuple[PluginOption, ...]


def configure_kapt(  # pylint: disable=too-many-arguments
    kapt3_jar: Path | None,
    tools_jar: Path | None,
    *,
    sources_dir: Path,
    classes_dir: Path,
    stubs_dir: Path,
    services_jar: Path,
    correct_error_types: bool,
    extra_options: Mapping[str, str],
) -> KaptPluginConfig:
    """Build the kapt plugin configuration.

    Raises:
      ConfigurationError: If no kapt3 jar is available.
    """
    if kapt3_jar is None:
        raise ConfigurationError(
            "A kotlin-annotation-processing jar is required when annotation processing is used."
        )
    plugin_classpaths = tuple(
        str(archive.absolute()) for archive in (kapt3_jar, tools_jar) if archive is not None
    )
    options = [
        kapt_option(KaptOption.SOURCES, str(sources_dir.absolute())),
        kapt_option(KaptOption.CLASSES, str(classes_dir.absolute())),
        kapt_option(KaptOption.STUBS, str(stubs_dir.absolute())),
        kapt_option(KaptOption.AP_CLASSPATH, str(services_jar.absolute())),
        kapt_option(KaptOption.CORRECT_ERROR_TYPES, "true" if correct_error_types else "false"),
        # kapt crashes with an obscure "write unsafe context" error without aptMode.
        kapt_option(KaptOption.APT_MODE, "stubsAndApt"),
    ]
    if extra_options:
        options.append(kapt_option(KaptOption.AP_OPTIONS, encode_kapt_options(extra_options)))
    return KaptPluginConfig(plugin_classpaths=plugin_classpaths, plugin_options=tuple(options))
