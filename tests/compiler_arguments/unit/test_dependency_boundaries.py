"""Boundary tests for internal package dependencies."""

from __future__ import annotations

from pathlib import Path


def _package_root() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "kotlin_compile_tester"


def test_argument_composition_does_not_depend_on_compilation_run() -> None:
    package_root = _package_root()
    lower_layers = (
        package_root / "compiler_arguments",
        package_root / "annotation_processing",
        package_root / "service_registry",
        package_root / "dependency_resolution",
        package_root / "configuration",
    )
    forbidden_import_fragments = (
        "kotlin_compile_tester.compilation_run",
        "kotlin_compile_tester.cli",
        "import click",
    )

    for layer in lower_layers:
        for module_path in layer.glob("*.py"):
            text = module_path.read_text(encoding="utf-8")
            for fragment in forbidden_import_fragments:
                assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"
