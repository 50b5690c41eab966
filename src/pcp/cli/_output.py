"""CLI output helpers.

stdout is reserved for compiled output, which callers pipe to downstream
tools. Every diagnostic, including errors, goes to stderr.
"""
from __future__ import annotations

import sys


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)


def print_info(message: str) -> None:
    """Print an informational message to stderr."""
    print(message, file=sys.stderr)


__all__ = ["print_error", "print_info"]
