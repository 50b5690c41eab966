"""Builders for prompt documents and source files used across tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml


def write_document(path: Path, *operations: Dict[str, Any]) -> Path:
    """Write a prompt document with ``operations`` in order and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump({"prompt": list(operations)}, sort_keys=False),
        encoding="utf-8",
    )
    return path


def write_file(path: Path, content: str | bytes) -> Path:
    """Write ``content`` byte-for-byte (no newline translation) and return ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = content.encode("utf-8") if isinstance(content, str) else content
    path.write_bytes(data)
    return path
