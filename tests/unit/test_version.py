"""Unit coverage for the project version helper."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

from vntax.backend.version import PYPROJECT_PATH, get_project_version, read_pyproject_version


def test_pyproject_path_points_at_checkout() -> None:
    assert PYPROJECT_PATH == Path(__file__).resolve().parents[2] / "pyproject.toml"


def test_get_project_version_prefers_installed_metadata(monkeypatch) -> None:
    get_project_version.cache_clear()
    monkeypatch.setattr(metadata, "version", lambda package: "9.9.9")

    assert get_project_version() == "9.9.9"
    get_project_version.cache_clear()


def test_get_project_version_falls_back_to_pyproject(monkeypatch) -> None:
    get_project_version.cache_clear()

    def raise_package_not_found(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", raise_package_not_found)

    assert get_project_version() == read_pyproject_version(PYPROJECT_PATH)
    get_project_version.cache_clear()


def test_read_pyproject_version_ignores_other_sections(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text(
        '[tool.other]\nversion = "0.0.1"\n\n[project]\nname = "vntax"\nversion = "1.2.3"\n',
        encoding="utf-8",
    )

    assert read_pyproject_version(path) == "1.2.3"


def test_read_pyproject_version_requires_file(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError, match="Unable to locate"):
        read_pyproject_version(tmp_path / "missing.toml")


def test_read_pyproject_version_requires_declaration(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "vntax"\n', encoding="utf-8")

    with pytest.raises(RuntimeError, match="No \\[project\\] version"):
        read_pyproject_version(path)
