"""Packaging of service registrations into a jar for annotation processing."""

from __future__ import annotations

import zipfile
from collections.abc import Sequence
from pathlib import Path

from kotlin_compile_tester.configuration.request_settings import ServiceBinding, qualified_name

SERVICES_PREFIX = "META-INF/services/"


def group_service_bindings(bindings: Sequence[ServiceBinding]) -> dict[str, list[str]]:
    """Group implementation names by service interface name.

    Implementations keep the order they were supplied in; a repeated
    (interface, implementation) pair is kept once.
    """
    grouped: dict[str, list[str]] = {}
    for binding in bindings:
        service_name = qualified_name(binding.service_interface)
        implementation_name = qualified_name(binding.implementation)
        implementations = grouped.setdefault(service_name, [])
        if implementation_name not in implementations:
            implementations.append(implementation_name)
    return grouped


def package_services(bindings: Sequence[ServiceBinding], destination: Path) -> Path:
    """Write a jar holding one `META-INF/services` registration file per interface.

    Every class identity is resolved before the archive is opened, so an
    invalid binding leaves no file behind.

    Raises:
      ConfigurationError: If a binding names a class without a qualified name.
      OSError: If the archive cannot be written.
    """
    grouped = group_service_bindings(bindings)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(destination, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
        for service_name, implementations in grouped.items():
            body = "".join(f"{implementation}\n" for implementation in implementations)
            archive.writestr(f"{SERVICES_PREFIX}{service_name}", body.encode("utf-8"))
    return destination
