"""
Auto-discovery CLI dispatcher for pcp.

Scans cli/commands/ for command modules and registers them. Each module
exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
Arguments that do not start with a known command name are routed to the
default ``compile`` command.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from pcp.cli._output import print_error

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "compile"


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        try:
            module = importlib.import_module(f"pcp.cli.commands.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with auto-discovered commands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="pcp",
        description="pcp: Prompt Composition Processor - compiles content from multiple sources "
        "into a single text output for AI agents.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description=f"Available commands ('{DEFAULT_COMMAND}' is used when none is given)",
        metavar="<command>",
    )

    for cmd_name, cmd_info in discover_root_commands().items():
        cmd_parser = subparsers.add_parser(
            cmd_name,
            help=cmd_info["summary"],
            description=cmd_info["summary"],
            prog="pcp" if cmd_name == DEFAULT_COMMAND else f"pcp {cmd_name}",
        )
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    """Get pcp version string."""
    from pcp import __version__

    return __version__


def _route_default_command(argv: list[str]) -> list[str]:
    """Prefix ``argv`` with the default command unless it names one already."""
    if argv and (argv[0] in discover_root_commands() or argv[0] == "--version"):
        return argv
    return [DEFAULT_COMMAND, *argv]


def _configure_logging(args: argparse.Namespace) -> None:
    from pcp.core.config import LoggingConfig
    from pcp.core.logging import configure_logging

    cfg = LoggingConfig()
    level = "DEBUG" if getattr(args, "verbose", False) else cfg.level
    configure_logging(level=level, log_file=cfg.file)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the pcp CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for any compilation or validation failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(_route_default_command(list(argv)))

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        parser.print_help(file=sys.stderr)
        return 1

    try:
        _configure_logging(args)
        return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("command %s failed", args.command, exc_info=True)
        print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
