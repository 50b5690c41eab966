"""File I/O helpers: atomic writes, exact-text reads, YAML loading."""
from .core import (
    PathLike,
    atomic_write,
    ensure_parent_dir,
    is_binary_file,
    read_text_exact,
    write_text,
)
from .yaml import read_yaml

__all__ = [
    "PathLike",
    "atomic_write",
    "ensure_parent_dir",
    "is_binary_file",
    "read_text_exact",
    "write_text",
    "read_yaml",
]
