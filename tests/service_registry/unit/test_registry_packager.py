"""Tests for the services jar packager."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest
from kotlin_compile_tester.configuration.configuration_errors import ConfigurationError
from kotlin_compile_tester.configuration.request_settings import ServiceBinding
from kotlin_compile_tester.service_registry.registry_packager import (
    group_service_bindings,
    package_services,
)


def test_package_services_writes_one_entry_per_interface(tmp_path: Path) -> None:
    bindings = [
        ServiceBinding("com.example.IFace1", "com.example.ImplA"),
        ServiceBinding("com.example.IFace1", "com.example.ImplB"),
        ServiceBinding("com.example.IFace2", "com.example.ImplC"),
    ]

    archive_path = package_services(bindings, tmp_path / "services.jar")

    with zipfile.ZipFile(archive_path) as archive:
        assert sorted(archive.namelist()) == [
            "META-INF/services/com.example.IFace1",
            "META-INF/services/com.example.IFace2",
        ]
        iface1 = archive.read("META-INF/services/com.example.IFace1").decode("utf-8")
        iface2 = archive.read("META-INF/services/com.example.IFace2").decode("utf-8")
    assert iface1 == "com.example.ImplA\ncom.example.ImplB\n"
    assert iface2 == "com.example.ImplC\n"


def test_package_services_without_bindings_writes_empty_archive(tmp_path: Path) -> None:
    archive_path = package_services([], tmp_path / "services.jar")

    with zipfile.ZipFile(archive_path) as archive:
        assert archive.namelist() == []


def test_grouping_keeps_supplied_order_and_collapses_duplicates() -> None:
    bindings = [
        ServiceBinding("a.Service", "a.Second"),
        ServiceBinding("b.Other", "b.Impl"),
        ServiceBinding("a.Service", "a.First"),
        ServiceBinding("a.Service", "a.Second"),
    ]

    assert group_service_bindings(bindings) == {
        "a.Service": ["a.Second", "a.First"],
        "b.Other": ["b.Impl"],
    }


def test_unresolvable_implementation_fails_before_archive_is_written(tmp_path: Path) -> None:
    destination = tmp_path / "services.jar"
    bindings = [
        ServiceBinding("a.Service", "a.Impl"),
        ServiceBinding("a.Service", "a.Outer$1"),
    ]

    with pytest.raises(ConfigurationError, match="anonymous or local"):
        package_services(bindings, destination)

    assert not destination.exists()


def test_unwritable_destination_raises_os_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(OSError):
        package_services([ServiceBinding("a.Service", "a.Impl")], blocker / "services.jar")
