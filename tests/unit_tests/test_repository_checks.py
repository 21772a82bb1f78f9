"""Unit tests for the repository check scripts."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest

SCRIPTS = Path(__file__).resolve().parents[2] / "scripts"


def _load(name: str) -> ModuleType:
    module_spec = importlib.util.spec_from_file_location(name, SCRIPTS / f"{name}.py")
    assert module_spec is not None and module_spec.loader is not None
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture
def deps() -> ModuleType:
    return _load("check_dependencies_sync")


def test_architecture_checks_pass_on_repository(capsys: pytest.CaptureFixture[str]) -> None:
    """Codec imports stay out of the CLI, registry and application layer."""
    _load("check_architecture").main()
    assert "Architecture checks passed." in capsys.readouterr().out


def test_dependency_checks_pass_on_repository(
    deps: ModuleType, capsys: pytest.CaptureFixture[str]
) -> None:
    """Imports, test extra and requirements.txt all agree with pyproject."""
    deps.main([])
    assert "Dependency checks passed." in capsys.readouterr().out


def test_imported_modules_maps_to_distributions(deps: ModuleType) -> None:
    """Third-party imports resolve to declared distribution names."""
    modules = deps.imported_modules()
    assert {"PIL", "reportlab", "pydantic_settings", "typer", "fastapi"} <= modules
    assert "file_converter" not in modules
    assert "zipfile" not in modules


def test_undeclared_import_is_reported(deps: ModuleType) -> None:
    """Flag an import whose distribution is not declared anywhere."""
    project = {
        "dependencies": ["pillow>=10.0"],
        "optional-dependencies": {"server": ["fastapi>=0.110"]},
    }
    assert deps.undeclared_imports(project, {"PIL", "fastapi", "numpy"}) == ["numpy"]


def test_missing_from_test_extra(deps: ModuleType) -> None:
    """The test extra must carry the cli and server extras."""
    project = {
        "optional-dependencies": {
            "cli": ["typer>=0.12"],
            "server": ["fastapi>=0.110", "uvicorn[standard]>=0.29"],
            "test": ["typer", "pytest"],
        }
    }
    assert deps.missing_from_test_extra(project) == ["fastapi", "uvicorn"]


def test_requirements_drift(deps: ModuleType) -> None:
    """Report both missing and unexpected requirement lines."""
    project = {
        "dependencies": ["pillow>=10.0"],
        "optional-dependencies": {"cli": ["typer>=0.12"]},
    }
    text = "# header\n\npillow>=10.0\nrequests  # stray\n"
    assert deps.requirements_drift(project, text) == (["typer>=0.12"], ["requests"])


def test_write_regenerates_requirements(
    deps: ModuleType, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``--write`` rewrites requirements.txt from pyproject."""
    target = tmp_path / "requirements.txt"
    monkeypatch.setattr(deps, "REQUIREMENTS", target)

    deps.main(["--write"])

    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("# Generated from pyproject.toml")
    assert "reportlab>=4.0" in lines
    assert "typer>=0.12" in lines
    assert not any(line.startswith("pytest") for line in lines)


def test_requirement_name_normalizes(deps: ModuleType) -> None:
    """Strip specifiers, extras and markers; normalize separators."""
    assert deps.requirement_name("Pydantic_Settings>=2.1") == "pydantic-settings"
    assert deps.requirement_name("uvicorn[standard]>=0.29; python_version>'3'") == "uvicorn"
    with pytest.raises(ValueError, match="Unparseable"):
        deps.requirement_name(">=1.0")
