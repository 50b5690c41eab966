"""Text helpers for word budgeting."""
from __future__ import annotations


def count_words(text: str) -> int:
    """Return the number of maximal non-whitespace runs in ``text``."""
    if not text:
        return 0
    return len(text.split())


__all__ = ["count_words"]
