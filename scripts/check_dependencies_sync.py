#!/usr/bin/env python3
"""Check that declared dependencies match what the package imports.

Three checks run against ``pyproject.toml``:

* every third-party module imported under ``src/file_converter`` (including
  optional ``importlib.import_module`` loads) is declared somewhere;
* the ``test`` extra carries the ``cli`` and ``server`` extras, since the
  suite drives the typer app and the FastAPI app;
* ``requirements.txt`` lists the base dependencies plus ``cli`` and
  ``server``. Pass ``--write`` to regenerate it.
"""

from __future__ import annotations

import argparse
import ast
import re
import sys
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/file_converter"
REQUIREMENTS = ROOT / "requirements.txt"
# Runtime profile shipped in requirements.txt: core + CLI + HTTP server.
RUNTIME_EXTRAS = ("cli", "server")
TEST_EXTRA = "test"
# Import name -> distribution name where they differ.
DISTRIBUTIONS = {
    "PIL": "pillow",
    "pydantic_settings": "pydantic-settings",
}
HEADER = (
    "# Generated from pyproject.toml (base + extras: cli,server)\n"
    "# Do not edit manually; run: python scripts/check_dependencies_sync.py --write\n"
    "\n"
)

_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")


def _project() -> dict:
    return tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))["project"]


def requirement_name(requirement: str) -> str:
    """Return the normalized distribution name of a requirement string."""
    match = _NAME.match(requirement)
    if match is None:
        raise ValueError(f"Unparseable requirement: {requirement!r}")
    return re.sub(r"[-_.]+", "-", match.group(1)).lower()


def runtime_requirements(project: dict) -> list[str]:
    """Base dependencies plus the runtime extras, sorted."""
    deps = set(project.get("dependencies", []))
    optional = project.get("optional-dependencies", {})
    for extra in RUNTIME_EXTRAS:
        deps.update(optional.get(extra, []))
    return sorted(dep.strip() for dep in deps if dep.strip())


def imported_modules(package: Path = PACKAGE) -> set[str]:
    """Top-level third-party modules imported anywhere in ``package``."""
    found: set[str] = set()
    for path in package.rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                found.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                found.add(node.module.split(".")[0])
            elif (
                isinstance(node, ast.Call)
                and isinstance(node.func, ast.Attribute)
                and node.func.attr == "import_module"
                and node.args
                and isinstance(node.args[0], ast.Constant)
                and isinstance(node.args[0].value, str)
            ):
                found.add(node.args[0].value.split(".")[0])
    return {
        name
        for name in found
        if name not in sys.stdlib_module_names and name not in {"__future__", "file_converter"}
    }


def undeclared_imports(project: dict, modules: set[str]) -> list[str]:
    """Imported distributions missing from every dependency list."""
    declared = {requirement_name(dep) for dep in project.get("dependencies", [])}
    for deps in project.get("optional-dependencies", {}).values():
        declared.update(requirement_name(dep) for dep in deps)
    missing = {
        DISTRIBUTIONS.get(module, module).lower().replace("_", "-") for module in modules
    } - declared
    return sorted(missing)


def missing_from_test_extra(project: dict) -> list[str]:
    """Runtime extra requirements absent from the test extra."""
    optional = project.get("optional-dependencies", {})
    have = {requirement_name(dep) for dep in optional.get(TEST_EXTRA, [])}
    needed = {requirement_name(dep) for extra in RUNTIME_EXTRAS for dep in optional.get(extra, [])}
    return sorted(needed - have)


def requirements_drift(project: dict, text: str) -> tuple[list[str], list[str]]:
    """Return (missing, unexpected) lines of ``requirements.txt``."""
    expected = set(runtime_requirements(project))
    actual = {
        line.split("#", 1)[0].strip()
        for line in text.splitlines()
        if line.split("#", 1)[0].strip()
    }
    return sorted(expected - actual), sorted(actual - expected)


def main(argv: list[str] | None = None) -> None:
    """Run all dependency checks, or regenerate requirements.txt with ``--write``."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--write", action="store_true", help="Regenerate requirements.txt.")
    args = parser.parse_args(argv)
    project = _project()

    if args.write:
        reqs = runtime_requirements(project)
        REQUIREMENTS.write_text(HEADER + "\n".join(reqs) + "\n", encoding="utf-8")
        print(f"Wrote {len(reqs)} requirements to requirements.txt")
        return

    problems: list[str] = []
    undeclared = undeclared_imports(project, imported_modules())
    if undeclared:
        problems.append("Imported but not declared in pyproject.toml:")
        problems.extend(f"- {name}" for name in undeclared)
    gaps = missing_from_test_extra(project)
    if gaps:
        problems.append(f"Missing from the '{TEST_EXTRA}' extra:")
        problems.extend(f"- {name}" for name in gaps)
    missing, unexpected = requirements_drift(project, REQUIREMENTS.read_text(encoding="utf-8"))
    if missing or unexpected:
        problems.append("requirements.txt is out of sync; run with --write.")
        problems.extend(f"- missing {entry}" for entry in missing)
        problems.extend(f"- unexpected {entry}" for entry in unexpected)
    if problems:
        raise SystemExit("\n".join(problems))
    print("Dependency checks passed.")


if __name__ == "__main__":
    main()
