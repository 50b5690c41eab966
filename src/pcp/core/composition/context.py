"""Per-walk composition state.

Each walk (validation or execution) builds its own WalkContext; the two are
never shared. The recursion stack is scoped push/pop state, not a cache of
every document ever seen, so one document may legally be included from
several independent branches.
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from pcp.core.exceptions import CircularReferenceError, WordLimitExceededError
from pcp.core.utils.io.core import BINARY_SNIFF_BYTES
from pcp.core.utils.subprocess import DEFAULT_SHELL


def absolute_path(path: Path | str) -> Path:
    """Normalize ``path`` to an absolute path without resolving symlinks."""
    return Path(os.path.abspath(path))


@dataclass
class WalkContext:
    """Mutable state threaded through one depth-first walk.

    Attributes:
        base_dir: Directory of the document currently being processed
        stack: Absolute paths of documents currently being expanded, outermost first
        max_words: Word ceiling; None disables budgeting (validation walk)
        word_count: Running total of counted words
        delimiter_style: Header style used for nested section headers
        binary_sniff_bytes: Prefix length inspected by the binary heuristic
        shell: Shell executable used for command operations
    """

    base_dir: Path
    max_words: Optional[int] = None
    delimiter_style: str = "xml"
    binary_sniff_bytes: int = BINARY_SNIFF_BYTES
    shell: str = DEFAULT_SHELL
    word_count: int = 0
    stack: List[Path] = field(default_factory=list)

    @classmethod
    def for_document(cls, document_path: Path | str, **kwargs) -> "WalkContext":
        """Fresh context whose base directory is the document's directory."""
        return cls(base_dir=absolute_path(document_path).parent, **kwargs)

    def resolve(self, path: str) -> Path:
        """Resolve ``path`` against the current base directory."""
        candidate = Path(path)
        if candidate.is_absolute():
            return absolute_path(candidate)
        return absolute_path(self.base_dir / candidate)

    def is_active(self, path: Path | str) -> bool:
        return absolute_path(path) in self.stack

    def check_not_active(self, path: Path | str) -> Path:
        """Return the absolute path, or raise if it is already on the stack."""
        abs_path = absolute_path(path)
        if abs_path in self.stack:
            raise CircularReferenceError(abs_path, [*self.stack, abs_path])
        return abs_path

    @contextmanager
    def enter(self, document_path: Path | str) -> Iterator[Path]:
        """Push a document onto the stack and make its directory the base.

        The previous base directory is restored and the document popped when
        the block exits, whether or not it raised.
        """
        abs_path = self.check_not_active(document_path)
        previous_base = self.base_dir
        self.stack.append(abs_path)
        self.base_dir = abs_path.parent
        try:
            yield abs_path
        finally:
            self.stack.pop()
            self.base_dir = previous_base

    def add_words(self, count: int) -> None:
        """Add ``count`` to the running total, failing once it passes the ceiling."""
        self.word_count += count
        if self.max_words is not None and self.word_count > self.max_words:
            raise WordLimitExceededError(self.word_count, self.max_words)


__all__ = ["WalkContext", "absolute_path"]
