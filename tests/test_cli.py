from __future__ import annotations

import pytest

from nonnative.cli import parse_args, parse_harness_args


def test_target_defaults_to_empty():
    args = parse_args([])
    assert args.target == ""
    assert args.ignored == []
    assert args.log_level is None


def test_only_first_positional_is_the_target():
    args = parse_args(["smoke", "extra", "more"])
    assert args.target == "smoke"
    assert args.ignored == ["extra", "more"]


def test_log_level_option_after_target():
    args = parse_args(["smoke", "--log-level", "DEBUG"])
    assert args.log_level == "DEBUG"
    assert args.target == "smoke"


@pytest.mark.parametrize("target", ["-h", "--help", "--ssl", "--log-level"])
def test_option_like_target_is_taken_verbatim(target: str):
    args = parse_args([target])
    assert args.target == target
    assert args.log_level is None
    assert args.ignored == []


def test_unknown_options_after_target_are_ignored():
    args = parse_args(["smoke", "-h", "--ssl"])
    assert args.target == "smoke"
    assert args.ignored == ["-h", "--ssl"]


def test_harness_args_collects_leading_words():
    assert parse_harness_args(["smoke", "mxs585.py"]).args == ["smoke", "mxs585.py"]
    assert parse_harness_args([]).args == []


def test_harness_args_keep_option_like_target():
    args = parse_harness_args(["--ssl", "mxs598.py", "--log-level", "WARNING"])
    assert args.args == ["--ssl", "mxs598.py"]
    assert args.log_level == "WARNING"
