"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log each step to stderr (debug level)",
    )


def add_output_flag(parser: argparse.ArgumentParser) -> None:
    """Add -o/--output for an optional output file.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "-o",
        "--output",
        dest="output_file",
        default=None,
        help="Output file path (default: stdout)",
    )


__all__ = ["add_verbose_flag", "add_output_flag"]
