"""Environment-backed settings.

The readers mirror the harness convention: a variable that is missing gets
its default written back into the mapping, so whatever is launched with that
mapping sees the same values the reader used.
"""
from __future__ import annotations

from collections.abc import MutableMapping

from pydantic import BaseModel, Field, field_validator

__all__ = [
    "Settings",
    "readenv",
    "readenv_int",
    "readenv_bool",
    "load_settings",
]

_TRUE_WORDS = {"yes", "true"}


def readenv(env: MutableMapping[str, str], name: str, default: str) -> str:
    """Return env[name], storing `default` first if it is unset."""
    value = env.get(name)
    if value is None:
        env[name] = default
        return default
    return value


def readenv_int(env: MutableMapping[str, str], name: str, default: int) -> int:
    """Integer variant of readenv(); unparsable values fall back to `default`."""
    value = env.get(name)
    if value is None:
        env[name] = str(default)
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def readenv_bool(env: MutableMapping[str, str], name: str, default: bool) -> bool:
    """Boolean variant of readenv(); only "yes" and "true" count as true."""
    value = env.get(name)
    if value is None:
        env[name] = "true" if default else "false"
        return default
    return value.strip().lower() in _TRUE_WORDS


class Settings(BaseModel):
    """Knobs shared by the dispatcher and the harness."""

    log_level: str = "INFO"
    harness_name: str = "non_native_setup"
    settle_seconds: int = Field(default=3, ge=0)
    companion_suffix: str = "1"
    ssl: bool = True
    smoke: bool = False

    @field_validator("log_level")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()

    @field_validator("harness_name")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("harness_name must not be empty")
        return v


def load_settings(env: MutableMapping[str, str]) -> Settings:
    """Build Settings from `env`, writing defaults back for unset variables."""
    return Settings(
        log_level=readenv(env, "LOG_LEVEL", "INFO"),
        harness_name=readenv(env, "NON_NATIVE_SETUP", "non_native_setup"),
        settle_seconds=readenv_int(env, "NON_NATIVE_SETTLE", 3),
        companion_suffix=readenv(env, "NON_NATIVE_SUFFIX", "1"),
        ssl=readenv_bool(env, "ssl", True),
        smoke=readenv_bool(env, "smoke", False),
    )
