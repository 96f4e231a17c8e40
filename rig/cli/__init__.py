"""Command line entry points (`rig ...`)."""

from .main import app, simulate

__all__ = ["app", "simulate"]
