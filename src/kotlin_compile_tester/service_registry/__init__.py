"""Service registry exports."""

from .registry_packager import SERVICES_PREFIX, group_service_bindings, package_services

__all__ = ["SERVICES_PREFIX", "group_service_bindings", "package_services"]
