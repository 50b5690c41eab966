"""
pcp demo command.

SUMMARY: Create and run a demonstration with sample files
"""

from __future__ import annotations

import argparse
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pcp.cli import print_info
from pcp.core.composition import compile_prompt, write_output
from pcp.core.utils.io import write_text
from pcp.data import list_files

SUMMARY = "Create and run a demonstration with sample files"

DEMO_ENTRYPOINT = "main.yml"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI arguments for ``pcp demo``."""
    parser.add_argument(
        "--dir",
        dest="demo_dir",
        default="demo",
        help="Directory to create the demo files in (default: ./demo)",
    )


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Change into ``path`` for the duration of the block."""
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(previous)


def write_demo_files(target: Path) -> list[Path]:
    """Copy the bundled demo documents into ``target`` (existing files are overwritten)."""
    written = []
    for src in list_files("demo"):
        if src.name.startswith("_") or src.suffix == ".py":
            continue
        dest = target / src.name
        write_text(dest, src.read_text(encoding="utf-8"))
        written.append(dest)
    return written


def main(args: argparse.Namespace) -> int:
    target = Path(args.demo_dir)
    print_info("Creating PCP demonstration...")
    for path in write_demo_files(target):
        print_info(f"Created {path}")

    print_info("\nRunning PCP demonstration...")
    print_info("----------------------------------------")
    # Commands in the demo documents run from inside the demo directory.
    project_root = Path.cwd()
    with working_directory(target):
        text = compile_prompt(DEMO_ENTRYPOINT, delimiter_style="xml", project_root=project_root)
    write_output(text)

    print_info("\nDemo completed successfully.")
    print_info(f"Demo files created in {target}/ directory")
    print_info(f"Clean up with: rm -rf {target}/")
    print_info("\nTry different delimiter styles:")
    for style in ("minimal", "none", "full"):
        print_info(f"   pcp -f {target / DEMO_ENTRYPOINT} --delimiter-style={style}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
