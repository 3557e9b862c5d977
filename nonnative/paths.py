from __future__ import annotations

import os
from pathlib import Path

__all__ = [
    "resolve_script",
    "script_dir",
    "script_name",
    "harness_path",
]


def resolve_script(path: str | os.PathLike[str]) -> Path:
    """Return the absolute, symlink-free path of an invoked script.

    Relative paths are taken against the current working directory, the way
    `realpath $0` treats them.

    Raises:
        ValueError: if the path is empty.
    """
    if not os.fspath(path):
        raise ValueError("script path must be a non-empty string")
    return Path(path).resolve()


def script_dir(path: str | os.PathLike[str]) -> str:
    """Absolute directory containing the resolved script."""
    return str(resolve_script(path).parent)


def script_name(path: str | os.PathLike[str]) -> str:
    """Base name of the resolved script."""
    return resolve_script(path).name


def harness_path(test_dir: str, harness: str) -> Path:
    """Locate the harness: bare names live in `test_dir`, absolute paths are kept."""
    p = Path(harness)
    if p.is_absolute():
        return p
    return Path(test_dir) / p
