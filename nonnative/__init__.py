"""Dispatch glue for non-native MaxScale regression tests.

Entry scripts resolve their own location and hand off to the
`non_native_setup` harness found in the caller's working directory.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("maxscale-nonnative")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
