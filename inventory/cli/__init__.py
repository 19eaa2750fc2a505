"""Command line interface for the content inventory."""

from .commands import cli

__all__ = ["cli"]
