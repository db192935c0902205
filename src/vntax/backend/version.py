"""Expose the VNTax version for responses and the command line."""

from __future__ import annotations

import re
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

DISTRIBUTION_NAME: Final = "vntax"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"

_SECTION_PATTERN = re.compile(r"^\[(?P<name>[^\]]+)\]\s*$")
_VERSION_PATTERN = re.compile(r"""^version\s*=\s*["'](?P<version>[^"']+)["']""")


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version, or the checkout's ``pyproject.toml`` one."""

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    """Read ``[project].version`` from ``path`` without a TOML parser."""

    if not path.exists():
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    in_project = False
    for line in path.read_text(encoding="utf-8").splitlines():
        section = _SECTION_PATTERN.match(line.strip())
        if section:
            in_project = section.group("name") == "project"
            continue
        if not in_project:
            continue
        match = _VERSION_PATTERN.match(line.strip())
        if match:
            return match.group("version")

    raise RuntimeError(f"No [project] version declared in {path.name}")


__all__ = ["DISTRIBUTION_NAME", "get_project_version", "read_pyproject_version"]
