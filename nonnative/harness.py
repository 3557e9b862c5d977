#!/usr/bin/env python3
"""Harness side of a non-native test.

Given `<target> <script_name>`, waits for the setup to settle and launches
the companion program `<test_dir>/<script_name>1 <target>`. Its exit status
becomes the harness's exit status. Preparing MaxScale and the backends is
left to the surrounding test environment.
"""
from __future__ import annotations

import os
import subprocess
import sys
import time
from collections.abc import Callable, MutableMapping

from nonnative.cli import parse_harness_args
from nonnative.config import load_settings, readenv
from nonnative.logging_conf import bind_context, get_logger, setup_logging
from nonnative.types import status_from_returncode

logger = get_logger("nonnative.harness")


def companion_command(test_dir: str, script_name: str, target: str, suffix: str = "1") -> list[str]:
    """Companion argv; an empty target is dropped, as word splitting would."""
    cmd = [os.path.join(test_dir, f"{script_name}{suffix}")]
    if target:
        cmd.append(target)
    return cmd


def run_harness(
    argv: list[str],
    env: MutableMapping[str, str] | None = None,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Run the companion program for `argv = [target, script_name]`.

    `env` receives the effective settings as written-back defaults and is
    passed on to the companion unchanged.
    """
    if len(argv) < 2:
        logger.error(
            "usage: non-native-setup <target> <script_name>",
            extra={"event": "harness_usage", "argc": len(argv)},
        )
        return 1
    target, name = argv[0], argv[1]

    if env is None:
        env = dict(os.environ)
    settings = load_settings(env)
    test_dir = readenv(env, "test_dir", os.getcwd())
    bind_context(script_name=name, test_dir=test_dir, target=target)

    sleep(settings.settle_seconds)

    cmd = companion_command(test_dir, name, target, settings.companion_suffix)
    logger.info(
        "harness.command",
        extra={
            "event": "harness_command",
            "sys": " ".join(cmd),
            "ssl": settings.ssl,
            "smoke": settings.smoke,
        },
    )
    try:
        proc = subprocess.run(cmd, env=dict(env), cwd=test_dir, check=False)
        code = status_from_returncode(proc.returncode)
    except FileNotFoundError:
        logger.error("companion not found", extra={"event": "companion_missing", "path": cmd[0]})
        code = 127
    except PermissionError:
        logger.error("companion not executable", extra={"event": "companion_denied", "path": cmd[0]})
        code = 126
    except OSError as e:
        logger.error(
            "companion cannot be executed",
            extra={"event": "companion_exec_failed", "path": cmd[0], "error": e.strerror},
        )
        code = 126

    if code != 0:
        logger.error(
            "Test %s FAILED!",
            target,
            extra={"event": "test_failed", "exit_code": code},
        )
    return code


def main(argv: list[str] | None = None) -> None:
    args = parse_harness_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.log_level)
    raise SystemExit(run_harness(args.args))


if __name__ == "__main__":
    main()
