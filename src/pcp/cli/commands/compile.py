"""
pcp compile command.

SUMMARY: Compile a prompt document into a single text stream (default command)
"""

from __future__ import annotations

import argparse
import sys

from pcp.cli import add_output_flag, add_verbose_flag, get_delimiter_style_choices, print_error
from pcp.core.composition import compile_prompt, write_output

SUMMARY = "Compile a prompt document into a single text stream (default command)"

EPILOG = """\
Commands:
  demo        Create and run a demonstration with sample files

Important: All errors are written to STDERR to ensure safe piping to agents.

Usage Patterns:
  RECOMMENDED: Use file output for reliable agent workflows
    pcp -f prompt.yml -o context.txt && agent < context.txt

  AVOID: Command substitution with piping (agent runs even if pcp fails)
    $(pcp -f prompt.yml) | agent

Prompt File Format:
  prompt:
    - file: "relative/path/to/file.txt"
    - prompt: "nested-prompt.yml"
    - command: "ls -la"
    - text: "Literal text content"

  Paths are relative to the document that declares them. Commands run in
  the current working directory; exit status 1 is reported as a warning.

Text Field Special Characters:
  Multiline text using YAML literal block scalar:
  - text: |
      This is line one
      This is line two
"""


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI arguments for ``pcp compile``."""
    parser.epilog = EPILOG
    parser.formatter_class = argparse.RawDescriptionHelpFormatter
    parser.add_argument(
        "-help",
        action="help",
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="prompt_file",
        default=None,
        help="Path to YAML prompt file (required)",
    )
    add_output_flag(parser)
    parser.add_argument(
        "--max-words",
        "-max-words",
        dest="max_words",
        type=int,
        default=None,
        help="Maximum words in compiled output (default: compile.max_words, 128000)",
    )
    parser.add_argument(
        "--delimiter-style",
        "-delimiter-style",
        dest="delimiter_style",
        default=None,
        metavar="{" + ",".join(get_delimiter_style_choices()) + "}",
        help="Section header style (default: compile.delimiter_style, xml)",
    )
    add_verbose_flag(parser)


def main(args: argparse.Namespace) -> int:
    if not args.prompt_file:
        print_error("-f flag is required")
        return 1

    styles = get_delimiter_style_choices()
    if args.delimiter_style is not None and args.delimiter_style not in styles:
        print_error(
            f"invalid delimiter style '{args.delimiter_style}'. Must be one of: {', '.join(styles)}"
        )
        return 1

    text = compile_prompt(
        args.prompt_file,
        max_words=args.max_words,
        delimiter_style=args.delimiter_style,
    )
    write_output(text, args.output_file)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
