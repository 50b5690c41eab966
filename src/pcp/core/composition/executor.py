"""Execution walk: turn operations into content sections.

Operations run strictly in declaration order, depth-first through nested
documents. The word budget is checked after every piece of content is
produced, so the walk stops at the first operation that crosses it.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Type

from pcp.core.exceptions import (
    BinaryFileError,
    CommandFailedError,
    PcpError,
    SourceFileNotFoundError,
    SourceReadError,
)
from pcp.core.utils.io import is_binary_file, read_text_exact
from pcp.core.utils.subprocess import run_shell
from pcp.core.utils.text import count_words

from .context import WalkContext
from .parser import load_document
from .renderer import format_section_header
from .types import (
    CommandRef,
    ContentSection,
    FileRef,
    Operation,
    OperationKind,
    PromptRef,
    TextLiteral,
)

logger = logging.getLogger(__name__)

TEXT_SOURCE = "text"


def _execute_file(op: FileRef, ctx: WalkContext) -> ContentSection:
    resolved = ctx.resolve(op.path)
    if not resolved.exists():
        raise SourceFileNotFoundError(resolved)
    if is_binary_file(resolved, ctx.binary_sniff_bytes):
        raise BinaryFileError(resolved)
    try:
        content = read_text_exact(resolved)
    except OSError as exc:
        raise SourceReadError(resolved, exc) from exc

    ctx.add_words(count_words(content))
    return ContentSection(source=op.path, content=content, kind=OperationKind.FILE)


def _execute_prompt(op: PromptRef, ctx: WalkContext) -> ContentSection:
    children = execute_document(ctx.resolve(op.path), ctx)

    parts: List[str] = []
    for i, child in enumerate(children):
        if i > 0:
            parts.append("\n")
        parts.append(format_section_header(f"{op.path}->{child.source}", ctx.delimiter_style))
        parts.append(child.content)
    combined = "".join(parts)

    ctx.add_words(count_words(combined))
    return ContentSection(source=op.path, content=combined, kind=OperationKind.PROMPT)


def _execute_command(op: CommandRef, ctx: WalkContext) -> ContentSection:
    try:
        completed = run_shell(op.command, shell=ctx.shell)
    except OSError as exc:
        raise CommandFailedError(op.command, exc) from exc

    code = completed.returncode
    if code == 1:
        logger.warning("command '%s' exited with status 1 but continuing processing", op.command)
    elif code < 0:
        raise CommandFailedError(op.command, f"terminated by signal {-code}", exit_code=code)
    elif code != 0:
        raise CommandFailedError(op.command, f"exit status {code}", exit_code=code)

    output = completed.stdout
    ctx.add_words(count_words(output))
    return ContentSection(source=op.command, content=output, kind=OperationKind.COMMAND)


def _execute_text(op: TextLiteral, ctx: WalkContext) -> ContentSection:
    ctx.add_words(count_words(op.text))
    return ContentSection(source=TEXT_SOURCE, content=op.text, kind=OperationKind.TEXT)


_HANDLERS: Dict[Type, Callable[..., ContentSection]] = {
    FileRef: _execute_file,
    PromptRef: _execute_prompt,
    CommandRef: _execute_command,
    TextLiteral: _execute_text,
}


def execute_operation(op: Operation, ctx: WalkContext) -> ContentSection:
    """Produce the content section for a single operation."""
    handler = _HANDLERS.get(type(op))
    if handler is None:
        raise TypeError(f"unknown operation type: {type(op).__name__}")
    logger.debug("executing %s operation: %s", op.kind.value, op.value)
    return handler(op, ctx)


def execute_document(path: Path | str, ctx: WalkContext) -> List[ContentSection]:
    """Execute every operation of the document at ``path`` in order.

    The document is pushed onto ``ctx``'s recursion stack and its directory
    becomes the base for relative references until it is finished.

    Errors propagate unchanged in type; the innermost document path and
    operation index are recorded in ``error.context``.
    """
    sections: List[ContentSection] = []
    with ctx.enter(path) as abs_path:
        document = load_document(abs_path)
        for index, op in enumerate(document):
            try:
                sections.append(execute_operation(op, ctx))
            except PcpError as exc:
                exc.context.setdefault("document", str(abs_path))
                exc.context.setdefault("index", index)
                raise
    return sections


__all__ = ["TEXT_SOURCE", "execute_operation", "execute_document"]
