"""Two-pass composition engine.

``compile_prompt`` validates the whole document graph first, then executes
it with a fresh context, then renders. Nothing is executed for a graph that
fails validation, and nothing is written unless compilation succeeds.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from pcp.core.utils.io import write_text

from .context import WalkContext
from .executor import execute_document
from .renderer import render
from .types import CompiledDocument
from .validator import validate_document

logger = logging.getLogger(__name__)


def compile_document(
    path: Path | str,
    *,
    max_words: int,
    delimiter_style: str,
    binary_sniff_bytes: Optional[int] = None,
    shell: Optional[str] = None,
) -> CompiledDocument:
    """Validate, then execute, the document at ``path``."""
    validate_document(path)

    ctx = WalkContext.for_document(path, max_words=max_words, delimiter_style=delimiter_style)
    if binary_sniff_bytes is not None:
        ctx.binary_sniff_bytes = binary_sniff_bytes
    if shell is not None:
        ctx.shell = shell

    sections = execute_document(path, ctx)
    logger.debug("compiled %s: %d sections, %d words counted", path, len(sections), ctx.word_count)
    return CompiledDocument(sections=tuple(sections))


def compile_prompt(
    path: Path | str,
    *,
    max_words: Optional[int] = None,
    delimiter_style: Optional[str] = None,
    project_root: Optional[Path] = None,
) -> str:
    """Compile the document at ``path`` into its final text.

    Arguments left as None fall back to the ``compile`` configuration
    section.
    """
    # Lazy import to avoid circular dependencies (config validates styles via the renderer).
    from pcp.core.config.domains.compile import CompileConfig

    cfg = CompileConfig(project_root=project_root)
    style = delimiter_style if delimiter_style is not None else cfg.delimiter_style
    compiled = compile_document(
        path,
        max_words=max_words if max_words is not None else cfg.max_words,
        delimiter_style=style,
        binary_sniff_bytes=cfg.binary_sniff_bytes,
        shell=cfg.shell,
    )
    return render(compiled, style)


def write_output(text: str, output_path: Optional[Path | str] = None, *, stream: Optional[TextIO] = None) -> None:
    """Write compiled text to ``output_path`` atomically, or to ``stream`` (stdout)."""
    if output_path:
        write_text(Path(output_path), text)
        logger.debug("wrote %d characters to %s", len(text), output_path)
        return
    out = stream if stream is not None else sys.stdout
    out.write(text)
    out.flush()


__all__ = ["compile_document", "compile_prompt", "write_output"]
