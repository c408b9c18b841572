"""Tests for kapt plugin configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from kotlin_compile_tester.annotation_processing.kapt_options_codec import decode_kapt_options
from kotlin_compile_tester.annotation_processing.kapt_plugin import (
    KAPT_PLUGIN_ID,
    KaptOption,
    KaptPluginConfig,
    PluginOption,
    configure_kapt,
    kapt_option,
)
from kotlin_compile_tester.configuration.configuration_errors import ConfigurationError


def _configure(tmp_path: Path, **overrides: Any) -> KaptPluginConfig:
    settings: dict[str, Any] = {
        "kapt3_jar": tmp_path / "kotlin-annotation-processing.jar",
        "tools_jar": None,
        "sources_dir": tmp_path / "kapt" / "sources",
        "classes_dir": tmp_path / "kapt" / "classes",
        "stubs_dir": tmp_path / "kapt" / "stubs",
        "services_jar": tmp_path / "services.jar",
        "correct_error_types": True,
        "extra_options": {},
    }
    settings.update(overrides)
    kapt3_jar = settings.pop("kapt3_jar")
    tools_jar = settings.pop("tools_jar")
    return configure_kapt(kapt3_jar, tools_jar, **settings)


def test_configure_kapt_emits_required_options_in_order(tmp_path: Path) -> None:
    config = _configure(tmp_path)

    assert config.plugin_classpaths == (str(tmp_path / "kotlin-annotation-processing.jar"),)
    assert [(option.key, option.value) for option in config.plugin_options] == [
        ("sources", str(tmp_path / "kapt" / "sources")),
        ("classes", str(tmp_path / "kapt" / "classes")),
        ("stubs", str(tmp_path / "kapt" / "stubs")),
        ("apclasspath", str(tmp_path / "services.jar")),
        ("correctErrorTypes", "true"),
        ("aptMode", "stubsAndApt"),
    ]
    assert {option.plugin_id for option in config.plugin_options} == {KAPT_PLUGIN_ID}


def test_configure_kapt_adds_tools_jar_to_plugin_classpath(tmp_path: Path) -> None:
    config = _configure(tmp_path, tools_jar=tmp_path / "tools.jar")

    assert config.plugin_classpaths == (
        str(tmp_path / "kotlin-annotation-processing.jar"),
        str(tmp_path / "tools.jar"),
    )


def test_configure_kapt_renders_disabled_error_type_correction(tmp_path: Path) -> None:
    config = _configure(tmp_path, correct_error_types=False)

    rendered = [option.render() for option in config.plugin_options]
    assert f"plugin:{KAPT_PLUGIN_ID}:correctErrorTypes=false" in rendered


def test_configure_kapt_encodes_processor_options(tmp_path: Path) -> None:
    config = _configure(tmp_path, extra_options={"room.schemaLocation": "/schemas"})

    apoptions = config.plugin_options[-1]
    assert apoptions.key == KaptOption.AP_OPTIONS.value
    assert decode_kapt_options(apoptions.value) == {"room.schemaLocation": "/schemas"}


def test_configure_kapt_without_kapt_jar_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="kotlin-annotation-processing"):
        _configure(tmp_path, kapt3_jar=None)


def test_plugin_option_parse_and_render() -> None:
    option = PluginOption.parse("plugin:com.example.plugin:mode=a=b")

    assert option == PluginOption("com.example.plugin", "mode", "a=b")
    assert option.render() == "plugin:com.example.plugin:mode=a=b"


@pytest.mark.parametrize(
    "text",
    ["com.example:mode=1", "plugin:com.example", "plugin:com.example:mode", "plugin::mode=1"],
)
def test_plugin_option_parse_rejects_malformed_text(text: str) -> None:
    with pytest.raises(ConfigurationError):
        PluginOption.parse(text)


def test_kapt_plugin_option_names_are_validated() -> None:
    assert kapt_option(KaptOption.APT_MODE, "stubs").render() == (
        f"plugin:{KAPT_PLUGIN_ID}:aptMode=stubs"
    )
    with pytest.raises(ConfigurationError, match="Unknown kapt plugin option"):
        PluginOption(KAPT_PLUGIN_ID, "javacArguments", "x")
