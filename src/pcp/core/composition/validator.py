"""Validation walk over the prompt reference graph.

Runs before anything is executed: every document reachable through
``prompt`` operations must parse, carry well-formed operations, and never
reference a document that is still being expanded. File, command and text
operations are only checked structurally here.
"""
from __future__ import annotations

import logging
from pathlib import Path

from .context import WalkContext
from .parser import load_document

logger = logging.getLogger(__name__)


def _validate(document_path: Path, ctx: WalkContext) -> int:
    visited = 1
    with ctx.enter(document_path) as abs_path:
        document = load_document(abs_path)
        for ref in document.prompt_refs():
            # Resolved against the directory of the document being walked.
            visited += _validate(ctx.resolve(ref.path), ctx)
    return visited


def validate_document(path: Path | str) -> int:
    """Validate the document graph rooted at ``path``.

    Uses its own WalkContext; nothing it builds is reused by execution.

    Returns:
        Number of document visits made (a document included from two
        branches counts twice).

    Raises:
        CircularReferenceError: A document includes one of its ancestors.
        SourceFileNotFoundError: A referenced document does not exist.
        InvalidYAMLError, DocumentSchemaError: A document is malformed.
    """
    ctx = WalkContext.for_document(path)
    visited = _validate(Path(path), ctx)
    logger.debug("validated %s (%d document visits)", path, visited)
    return visited


__all__ = ["validate_document"]
