from __future__ import annotations

"""
rig.version — package version string.

BASE_VERSION is bumped on intentional releases. Packaging/CI may pin a
different string through the RIG_VERSION environment variable.
"""


import os

BASE_VERSION = "0.1.0"


def build_version() -> str:
    v = os.getenv("RIG_VERSION")
    if v:
        return v
    return BASE_VERSION


__version__ = build_version()


def get_version() -> str:
    """Public helper returning the resolved version string."""
    return __version__


__all__ = ["__version__", "get_version", "BASE_VERSION"]
