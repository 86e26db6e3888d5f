from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
SOURCE_DIRS = ("core", "infra", "migration", "tests")


def _line_count(path: Path) -> int:
    return len(path.read_text(encoding="utf-8", errors="ignore").splitlines())


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        # Keep architecture checks focused on source/test code, not packaged artifacts.
        if "dist" in path.parts or "build" in path.parts:
            continue
        yield path


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom) and node.level == 0:
            yield node.module or ""


def _violations(root: Path, forbidden: tuple[str, ...]) -> list[tuple[str, str]]:
    found: list[tuple[str, str]] = []
    for path in _python_files(root):
        for name in _imported_modules(path):
            if any(name == prefix or name.startswith(prefix + ".") for prefix in forbidden):
                found.append((str(path.relative_to(ROOT)), name))
    return found


def test_no_python_module_exceeds_hard_line_limit():
    offenders = []
    for path in (p for top in SOURCE_DIRS for p in _python_files(ROOT / top)):
        lines = _line_count(path)
        if lines > 1200:
            offenders.append((str(path.relative_to(ROOT)), lines))
    assert not offenders, f"Modules exceed hard 1200-line limit: {offenders}"


def test_core_layer_does_not_import_infra_layer():
    violations = _violations(ROOT / "core", ("infra",))
    assert not violations, f"Core layer imports infra layer: {violations}"


def test_scheduling_engine_is_storage_and_view_agnostic():
    violations = _violations(
        ROOT / "core" / "services" / "scheduling",
        ("sqlalchemy", "alembic", "infra", "core.services.gantt"),
    )
    assert not violations, f"Scheduling engine imports storage or view code: {violations}"


def test_domain_layer_has_no_service_imports():
    violations = _violations(ROOT / "core" / "domain", ("core.services", "sqlalchemy", "infra"))
    assert not violations, f"Domain layer imports services or storage: {violations}"
