"""Compiler argument exports."""

from .argument_composer import build_classpath, compose_arguments, list_staged_sources
from .argument_models import CompilerArguments

__all__ = ["CompilerArguments", "build_classpath", "compose_arguments", "list_staged_sources"]
