"""Shared utilities for pcp core modules."""
from .merge import deep_merge
from .text import count_words

__all__ = ["deep_merge", "count_words"]
