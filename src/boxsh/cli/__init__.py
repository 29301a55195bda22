"""Command-line interface for boxsh."""

from boxsh.cli.app import build_parser, entrypoint, main

__all__ = [
    "build_parser",
    "entrypoint",
    "main",
]
