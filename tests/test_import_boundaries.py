"""
Import Boundary Tests.

Validates that architectural import rules are followed:
- web/services/* may ONLY import from core/*
- web/blueprints/* may NOT import directly from utils/
- core/* may NOT import from web/, flask, werkzeug
"""

import ast
from pathlib import Path


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


def get_imports_from_file(filepath: Path) -> list[tuple[str, int]]:
    """
    Extract all import statements from a Python file.

    Returns:
        List of (module_name, line_number) tuples
    """
    imports = []
    try:
        with open(filepath, encoding="utf-8") as f:
            tree = ast.parse(f.read(), filename=str(filepath))
    except SyntaxError:
        return imports

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append((alias.name, node.lineno))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                imports.append((node.module, node.lineno))

    return imports


def check_forbidden_imports(
    imports: list[tuple[str, int]], forbidden_prefixes: list[str]
) -> list[tuple[str, int]]:
    """
    Check for forbidden imports.

    Returns:
        List of (module_name, line_number) for violations
    """
    violations = []
    for module, line in imports:
        for prefix in forbidden_prefixes:
            if module.startswith(prefix):
                violations.append((module, line))
                break
    return violations


def _collect_violations(directory: Path, forbidden: list[str]) -> list[str]:
    all_violations = []
    for py_file in directory.glob("*.py"):
        if py_file.name == "__init__.py":
            continue
        imports = get_imports_from_file(py_file)
        for module, line in check_forbidden_imports(imports, forbidden):
            all_violations.append(f"{py_file.name}:{line} imports {module}")
    return all_violations


class TestWebLayerBoundaries:
    """Tests for web layer import boundaries."""

    def test_services_only_import_from_core(self):
        """web/services/* should only import from core/*."""
        services_dir = get_project_root() / "web" / "services"

        all_violations = _collect_violations(services_dir, ["utils", "config", "flask"])

        assert len(all_violations) == 0, (
            "Services should only import from core/*. Violations:\n"
            + "\n".join(all_violations)
        )

    def test_blueprints_do_not_import_utils(self):
        blueprint_dir = get_project_root() / "web" / "blueprints"

        all_violations = _collect_violations(blueprint_dir, ["utils"])

        assert len(all_violations) == 0, (
            "Blueprints should go through web.services. Violations:\n"
            + "\n".join(all_violations)
        )

    def test_core_does_not_import_web(self):
        """core/* should never import from web/, flask, werkzeug."""
        core_dir = get_project_root() / "core"

        all_violations = _collect_violations(core_dir, ["web.", "flask", "werkzeug"])

        assert len(all_violations) == 0, (
            "Core should never import web layer. Violations:\n"
            + "\n".join(all_violations)
        )

    def test_search_logic_does_not_touch_the_database(self):
        """Predicate evaluation and session state must stay storage-free."""
        core_dir = get_project_root() / "core"
        forbidden = ["utils", "sqlite3", "config"]

        violations = []
        for name in ("facets.py", "search_core.py", "search_session.py", "root_query.py"):
            imports = get_imports_from_file(core_dir / name)
            for module, line in check_forbidden_imports(imports, forbidden):
                violations.append(f"{name}:{line} imports {module}")

        assert violations == []


class TestModuleStructure:
    """Tests for module structure integrity."""

    def test_core_modules_exist(self):
        """Verify all required core modules exist."""
        core_dir = get_project_root() / "core"

        required_modules = [
            "catalog_core.py",
            "errors.py",
            "facets.py",
            "records.py",
            "root_query.py",
            "search_core.py",
            "search_session.py",
            "settings_core.py",
        ]

        missing = [m for m in required_modules if not (core_dir / m).exists()]
        assert missing == [], f"Missing core modules: {missing}"
