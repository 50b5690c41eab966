"""
Bundled pcp resources.

- config/defaults.yaml: lowest configuration layer
- schemas/prompt-document.schema.yaml: structure of a prompt document
- demo/: documents written out by ``pcp demo``
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Return the on-disk path of a bundled resource directory or file.

    Example:
        >>> get_data_path("config", "defaults.yaml")
        PosixPath('/path/to/pcp/data/config/defaults.yaml')
    """
    base = Path(str(resources.files("pcp.data") / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=8)
def read_yaml(subpackage: str, filename: str) -> Any:
    """Parse a bundled YAML resource once per process."""
    return yaml.safe_load(get_data_path(subpackage, filename).read_text(encoding="utf-8"))


def list_files(subpackage: str, pattern: str = "*") -> list[Path]:
    """Regular files in a resource directory, sorted by name."""
    return sorted(p for p in get_data_path(subpackage).glob(pattern) if p.is_file())


__all__ = ["get_data_path", "read_yaml", "list_files"]
