"""Tests for compiler argument composition."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from kotlin_compile_tester.annotation_processing.kapt_plugin import (
    KaptOption,
    KaptPluginConfig,
    kapt_option,
)
from kotlin_compile_tester.compiler_arguments.argument_composer import (
    build_classpath,
    compose_arguments,
    list_staged_sources,
)
from kotlin_compile_tester.configuration.configuration_errors import ConfigurationError
from kotlin_compile_tester.configuration.request_settings import (
    CompilationRequest,
    ServiceBinding,
)

_PROCESSOR_BINDING = ServiceBinding("javax.annotation.processing.Processor", "a.Processor")


def _kapt_config() -> KaptPluginConfig:
    return KaptPluginConfig(
        plugin_classpaths=("/libs/kapt.jar",),
        plugin_options=(kapt_option(KaptOption.APT_MODE, "stubsAndApt"),),
    )


def _stage_sources(request: CompilationRequest, *names: str) -> None:
    request.sources_dir.mkdir(parents=True)
    for name in names:
        (request.sources_dir / name).write_text("", encoding="utf-8")


def test_build_classpath_keeps_precedence_and_first_occurrence() -> None:
    classpath = build_classpath(
        [Path("/explicit/a.jar"), Path("/shared/stdlib.jar")],
        [Path("/shared/stdlib.jar"), Path("/found/reflect.jar")],
        [Path("/host/x.jar"), Path("/explicit/a.jar")],
    )

    assert classpath == (
        "/explicit/a.jar",
        "/shared/stdlib.jar",
        "/found/reflect.jar",
        "/host/x.jar",
    )


def test_build_classpath_collapses_parent_references_before_deduplicating() -> None:
    classpath = build_classpath(
        [Path("/x/../libs/lib.jar")],
        [],
        [Path("/libs/lib.jar"), Path("/libs/./other.jar")],
    )

    assert classpath == ("/libs/lib.jar", "/libs/other.jar")


def test_build_classpath_makes_relative_entries_absolute(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    assert build_classpath([Path("libs/dep.jar")], []) == (str(tmp_path / "libs" / "dep.jar"),)


def test_list_staged_sources_lists_top_level_entries_sorted(tmp_path: Path) -> None:
    (tmp_path / "b.kt").touch()
    (tmp_path / "A.java").touch()
    (tmp_path / "com" / "example").mkdir(parents=True)
    (tmp_path / "com" / "example" / "Nested.kt").touch()

    assert list_staged_sources(tmp_path) == [
        str(tmp_path / "A.java"),
        str(tmp_path / "b.kt"),
        str(tmp_path / "com"),
    ]
    assert list_staged_sources(tmp_path / "missing") == []


def test_compose_forces_stdlib_and_reflect_off_and_sets_destination(tmp_path: Path) -> None:
    request = CompilationRequest(working_dir=tmp_path, verbose=True, jvm_target="1.8")
    _stage_sources(request, "Main.kt")

    arguments = compose_arguments(request, ["/libs/a.jar", "/libs/b.jar"])

    assert arguments.no_stdlib is True
    assert arguments.no_reflect is True
    assert arguments.destination == str(tmp_path / "classes")
    assert arguments.classpath == os.pathsep.join(["/libs/a.jar", "/libs/b.jar"])
    assert arguments.free_args == (str(tmp_path / "sources" / "Main.kt"),)
    assert arguments.verbose is True
    assert arguments.jvm_target == "1.8"


def test_compose_uses_no_jdk_without_jdk_home(tmp_path: Path) -> None:
    messages: list[str] = []
    request = CompilationRequest(working_dir=tmp_path)

    arguments = compose_arguments(request, [], log=messages.append)

    assert arguments.no_jdk is True
    assert arguments.jdk_home is None
    assert "Using option -no-jdk. Kotlinc won't look for a JDK." in messages


def test_compose_passes_jdk_home_when_given(tmp_path: Path) -> None:
    request = CompilationRequest(working_dir=tmp_path, jdk_home=Path("/opt/jdk"))

    arguments = compose_arguments(request, [])

    assert arguments.no_jdk is False
    assert arguments.jdk_home == "/opt/jdk"


def test_compose_appends_caller_arguments_after_staged_sources(tmp_path: Path) -> None:
    request = CompilationRequest(working_dir=tmp_path, free_args=("-Xjsr305=strict",))
    _stage_sources(request, "B.kt", "A.kt")

    arguments = compose_arguments(request, [])

    assert arguments.free_args == (
        str(tmp_path / "sources" / "A.kt"),
        str(tmp_path / "sources" / "B.kt"),
        "-Xjsr305=strict",
    )


def test_compose_without_services_leaves_kapt_out(tmp_path: Path) -> None:
    messages: list[str] = []
    request = CompilationRequest(
        working_dir=tmp_path,
        plugin_classpaths=("/libs/plugin.jar",),
        plugin_options=("plugin:com.example:mode=fast",),
    )

    arguments = compose_arguments(request, [], _kapt_config(), log=messages.append)

    assert arguments.plugin_classpaths == ("/libs/plugin.jar",)
    assert [option.render() for option in arguments.plugin_options] == [
        "plugin:com.example:mode=fast"
    ]
    assert "No services were given. Not including kapt in the compiler's plugins." in messages


def test_compose_with_services_appends_kapt_after_caller_plugins(tmp_path: Path) -> None:
    request = CompilationRequest(
        working_dir=tmp_path,
        services=(_PROCESSOR_BINDING,),
        plugin_classpaths=("/libs/plugin.jar",),
        plugin_options=("plugin:com.example:mode=fast",),
    )

    arguments = compose_arguments(request, [], _kapt_config())

    assert arguments.plugin_classpaths == ("/libs/plugin.jar", "/libs/kapt.jar")
    assert [option.render() for option in arguments.plugin_options] == [
        "plugin:com.example:mode=fast",
        "plugin:org.jetbrains.kotlin.kapt3:aptMode=stubsAndApt",
    ]


def test_compose_with_services_requires_kapt_config(tmp_path: Path) -> None:
    request = CompilationRequest(working_dir=tmp_path, services=(_PROCESSOR_BINDING,))

    with pytest.raises(ConfigurationError, match="kapt"):
        compose_arguments(request, [])


def test_compose_rejects_malformed_caller_plugin_option(tmp_path: Path) -> None:
    request = CompilationRequest(working_dir=tmp_path, plugin_options=("mode=fast",))

    with pytest.raises(ConfigurationError, match="plugin:"):
        compose_arguments(request, [])


def test_compose_is_idempotent_for_unchanged_inputs(tmp_path: Path) -> None:
    request = CompilationRequest(working_dir=tmp_path, services=(_PROCESSOR_BINDING,))
    _stage_sources(request, "Main.kt", "Util.java")

    first = compose_arguments(request, ["/libs/a.jar"], _kapt_config())
    second = compose_arguments(request, ["/libs/a.jar"], _kapt_config())

    assert first == second
    assert first.to_command_line() == second.to_command_line()
