"""
pcp CLI package.

Provides the command-line interface with auto-discovery of commands from
cli/commands/. ``compile`` is the default command, so ``pcp -f doc.yml`` and
``pcp compile -f doc.yml`` are equivalent.

Framework utilities for building CLI commands:
- _output: stderr-only diagnostics
- _args: Common argument registration helpers
- _choices: Choice lists shared with the engine
"""
from ._output import print_error, print_info
from ._args import add_verbose_flag, add_output_flag
from ._choices import get_delimiter_style_choices

__all__ = [
    "print_error",
    "print_info",
    "add_verbose_flag",
    "add_output_flag",
    "get_delimiter_style_choices",
]
