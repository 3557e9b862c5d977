# tests/conftest.py
from __future__ import annotations

import json
import os
import stat
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]

_RECORDER = """#!{python}
import json
import os
import sys

print(" ".join(sys.argv[1:]), flush=True)
with open({record!r}, "w") as fh:
    json.dump(
        {{
            "argv": sys.argv[1:],
            "cwd": os.getcwd(),
            "env": {{k: os.environ.get(k) for k in {keys!r}}},
        }},
        fh,
    )
{tail}
"""

RECORDED_KEYS = ("src_dir", "test_dir", "script_name", "ssl", "smoke", "NON_NATIVE_SETTLE")


def _make_executable(path: Path) -> None:
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.fixture
def test_dir(tmp_path: Path) -> Path:
    d = tmp_path / "run"
    d.mkdir()
    return d


@pytest.fixture
def write_recorder(tmp_path: Path):
    """
    Factory for fake executables (harness or companion program).

    The program echoes its arguments on stdout, records argv/cwd/selected env
    into `<name>.json` next to `tmp_path`, then exits with `exit_code`.
    Usage:
        path, read = write_recorder(test_dir, "non_native_setup", exit_code=3)
        ... run ...
        seen = read()
    """

    def _write(directory: Path, name: str, exit_code: int = 0, tail: str | None = None):
        record = tmp_path / f"{name}.json"
        path = directory / name
        path.write_text(
            _RECORDER.format(
                python=sys.executable,
                record=str(record),
                keys=RECORDED_KEYS,
                tail=tail if tail is not None else f"sys.exit({exit_code})",
            ),
            encoding="utf-8",
        )
        _make_executable(path)

        def _read() -> dict:
            return json.loads(record.read_text(encoding="utf-8"))

        return path, _read

    return _write


@pytest.fixture
def entry_env() -> dict[str, str]:
    """Environment for running entry scripts in a subprocess."""
    env = dict(os.environ)
    paths = [str(REPO_ROOT)]
    if env.get("PYTHONPATH"):
        paths.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(paths)
    env.pop("NON_NATIVE_SETUP", None)
    return env
