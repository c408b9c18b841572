"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_REQUEST_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .configuration_errors import ConfigurationError
from .loader import load_request
from .request_settings import (
    AUTO,
    ArchiveResolution,
    CompilationRequest,
    ServiceBinding,
    SourceFile,
    SupportingArchives,
    qualified_name,
)

__all__ = [
    "AUTO",
    "ArchiveResolution",
    "CompilationRequest",
    "ServiceBinding",
    "SourceFile",
    "SupportingArchives",
    "qualified_name",
    "ConfigurationError",
    "load_request",
    "DEFAULT_REQUEST_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
