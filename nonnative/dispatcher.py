"""Resolve an entry script's location and hand off to the harness.

Steps:
- resolve the script path (symlinks included) into src_dir and script_name
- take test_dir from the caller's working directory
- run `<test_dir>/non_native_setup <target> <script_name>` with the three
  locations added to the child's environment
- exit with whatever the harness returned
"""
from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Mapping

from nonnative.cli import parse_args
from nonnative.config import Settings, load_settings
from nonnative.logging_conf import bind_context, get_logger, setup_logging
from nonnative.paths import harness_path, script_dir, script_name
from nonnative.types import (
    DispatchContext,
    DispatchError,
    HarnessNotExecutableError,
    HarnessNotFoundError,
    status_from_returncode,
)

logger = get_logger("nonnative.dispatcher")


def build_context(script_path: str | os.PathLike[str], cwd: str | None = None) -> DispatchContext:
    return DispatchContext(
        src_dir=script_dir(script_path),
        test_dir=cwd if cwd is not None else os.getcwd(),
        script_name=script_name(script_path),
    )


def child_env(ctx: DispatchContext, base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Environment for the harness: a copy of `base` plus the context variables."""
    env = dict(os.environ if base is None else base)
    env.update(ctx.as_env())
    return env


def build_command(ctx: DispatchContext, target: str, harness: str = "non_native_setup") -> list[str]:
    """Argument vector for the harness: always exactly two positionals."""
    return [str(harness_path(ctx.test_dir, harness)), target, ctx.script_name]


def dispatch(
    script_path: str | os.PathLike[str],
    target: str = "",
    *,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
    settings: Settings | None = None,
) -> int:
    """Run the harness for `script_path` and return its exit status.

    Raises:
        HarnessNotFoundError: the harness does not exist.
        HarnessNotExecutableError: the harness exists but cannot be run
            (no permission, or not a valid executable).
    """
    base = dict(os.environ if env is None else env)
    if settings is None:
        # read from a scratch copy so defaults don't leak into the child
        settings = load_settings(dict(base))
    ctx = build_context(script_path, cwd)
    bind_context(script_name=ctx.script_name, test_dir=ctx.test_dir)
    cmd = build_command(ctx, target, settings.harness_name)
    logger.debug(
        "dispatch.start",
        extra={"event": "dispatch_start", "argv": cmd, "src_dir": ctx.src_dir},
    )
    try:
        proc = subprocess.run(cmd, env=child_env(ctx, base), cwd=ctx.test_dir, check=False)
    except FileNotFoundError as e:
        raise HarnessNotFoundError(f"{cmd[0]}: command not found") from e
    except PermissionError as e:
        raise HarnessNotExecutableError(f"{cmd[0]}: permission denied") from e
    except OSError as e:
        raise HarnessNotExecutableError(f"{cmd[0]}: cannot execute: {e.strerror}") from e
    code = status_from_returncode(proc.returncode)
    logger.debug(
        "dispatch.end",
        extra={"event": "dispatch_end", "exit_code": code},
    )
    return code


def main(script_path: str | os.PathLike[str], argv: list[str] | None = None) -> None:
    """Entry point shared by the test scripts; always raises SystemExit."""
    args = parse_args(sys.argv[1:] if argv is None else argv, prog=os.path.basename(script_path))
    setup_logging(args.log_level)
    if args.ignored:
        logger.debug("dispatch.extra_args", extra={"event": "extra_args", "ignored": args.ignored})
    try:
        code = dispatch(script_path, args.target)
    except DispatchError as e:
        logger.error(str(e), extra={"event": "dispatch_failed", "exit_code": e.exit_code})
        raise SystemExit(e.exit_code) from e
    raise SystemExit(code)
