"""Expose the installed project version, with a ``pyproject.toml`` fallback."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "invoicecalc"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version or the one in ``pyproject.toml``."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(pyproject_path: Path) -> str:
    """Return ``[project].version`` from the ``pyproject.toml`` at ``pyproject_path``."""

    if not pyproject_path.exists():
        raise RuntimeError(f"Unable to locate project metadata at {pyproject_path}")

    in_project_table = False
    for raw_line in pyproject_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            in_project_table = line == "[project]"
            continue
        if in_project_table and line.startswith("version"):
            version = line.partition("=")[2].strip().strip('"')
            if version:
                return version
            break

    raise RuntimeError(f"No [project] version declared in {pyproject_path.name}")


__all__ = ["PACKAGE_NAME", "get_project_version", "read_pyproject_version"]
