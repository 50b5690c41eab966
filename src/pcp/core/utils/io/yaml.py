"""YAML file loading."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Parse the YAML file at ``path``.

    A missing, unreadable or malformed file yields ``default``, as does an
    empty one. With ``raise_on_error`` the first two raise ``OSError`` and a
    malformed file raises ``yaml.YAMLError``; an empty file still yields
    ``default``.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default
    return default if data is None else data


__all__ = ["read_yaml"]
