"""Shared helpers for pcp tests."""
from .documents import write_document, write_file

__all__ = ["write_document", "write_file"]
