"""Configuration error types."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Raised when a compilation request is invalid or cannot be satisfied."""
