from __future__ import annotations

import ast
from pathlib import Path

# Get the project root directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src" / "espolios"


def _imported_modules(py_file: Path) -> list[str]:
    tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    modules = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            modules.append(("." * node.level) + node.module)
    return modules


def test_domain_layer_has_no_infrastructure_imports():
    """Test that domain layer only imports standard library and pydantic."""
    allowed_modules = {"typing", "pydantic", "__future__"}

    for py_file in (SRC_DIR / "domain").rglob("*.py"):
        for module in _imported_modules(py_file):
            root = module.lstrip(".").split(".")[0]
            assert root in allowed_modules, f"Domain layer imports infrastructure: {module} in {py_file}"


def test_services_dont_import_concrete_adapters():
    """Services talk to the outside world through application.interfaces only."""
    forbidden = ("adapters", "observability", "persistence", "fastapi", "requests", "pymongo")

    for py_file in (SRC_DIR / "services").rglob("*.py"):
        for module in _imported_modules(py_file):
            for name in forbidden:
                assert name not in module, f"Service imports {module} in {py_file}"


def test_adapters_dont_import_api_layer():
    for layer in ("adapters", "persistence"):
        for py_file in (SRC_DIR / layer).rglob("*.py"):
            for module in _imported_modules(py_file):
                assert "api" not in module.split("."), f"{layer} imports the API layer: {module} in {py_file}"
                assert "container" not in module, f"{layer} imports the container: {module} in {py_file}"
