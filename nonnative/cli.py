from __future__ import annotations

import argparse


def _options_parser(prog: str | None) -> argparse.ArgumentParser:
    # no -h: every word after the verbatim positionals is ours or ignored
    parser = argparse.ArgumentParser(prog=prog, add_help=False)
    parser.add_argument("--log-level", default=None)
    return parser


def parse_args(argv: list[str], *, prog: str | None = None) -> argparse.Namespace:
    """Parse CLI arguments for a dispatcher entry script.

    The first word is the target and is taken verbatim, even when it looks
    like an option. Only `--log-level` is recognised after it; anything else
    is collected in `ignored`.
    """
    target = argv[0] if argv else ""
    args, ignored = _options_parser(prog).parse_known_args(argv[1:])
    args.target = target
    args.ignored = ignored
    return args


def parse_harness_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the harness.

    Up to two leading words (target, script name) are kept verbatim in
    `args`; the count is checked by the caller.
    """
    head = argv[:2]
    args, ignored = _options_parser("non-native-setup").parse_known_args(argv[2:])
    args.args = head
    args.ignored = ignored
    return args
