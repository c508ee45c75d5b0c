"""
Project metadata for log records (service name, version).

Installed distributions answer through importlib.metadata; source checkouts
fall back to the [project] table of the nearest pyproject.toml.
"""
import tomllib
from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path

DISTRIBUTION_NAME = "blog-api"


def _nearest_pyproject(start: Path, levels: int = 5) -> Path | None:
    for folder in [start, *start.parents][:levels]:
        candidate = folder / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


@lru_cache()
def project_table(start: Path | None = None) -> dict:
    """Return the [project] table of the nearest pyproject.toml, or {} when there is none."""
    pyproject = _nearest_pyproject((start or Path(__file__).parent).resolve())
    if pyproject is None:
        return {}
    try:
        with pyproject.open("rb") as fh:
            return tomllib.load(fh).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_project_name(default: str = DISTRIBUTION_NAME) -> str:
    return project_table().get("name") or default


def get_project_version(default: str = "unknown") -> str:
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return project_table().get("version") or default


__all__ = ["project_table", "get_project_name", "get_project_version"]
