from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DispatchContext:
    """Locations handed to the harness for one dispatched test."""

    src_dir: str
    test_dir: str
    script_name: str

    def as_env(self) -> dict[str, str]:
        """Return the three variables the harness reads from its environment."""
        return {
            "src_dir": self.src_dir,
            "test_dir": self.test_dir,
            "script_name": self.script_name,
        }


class DispatchError(RuntimeError):
    """Raised when the harness cannot be started at all."""

    exit_code = 1


class HarnessNotFoundError(DispatchError):
    """Raised when the harness executable does not exist."""

    exit_code = 127


class HarnessNotExecutableError(DispatchError):
    """Raised when the harness exists but cannot be executed."""

    exit_code = 126


def status_from_returncode(returncode: int) -> int:
    """Translate a subprocess return code into a shell-style exit status.

    A child killed by signal N reports -N; shells report that as 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode
