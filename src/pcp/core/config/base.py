"""Base class for the typed accessors over one configuration section."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Read-only view of one top-level section of the merged configuration.

    Subclasses name their section and expose validated values as cached
    properties, e.g. ``CompileConfig().max_words``.
    """

    def __init__(self, project_root: Optional[Path] = None) -> None:
        self.project_root = project_root
        self._config = get_cached_config(project_root=project_root)

    @abstractmethod
    def _config_section(self) -> str:
        """Top-level key this accessor reads."""

    @cached_property
    def section(self) -> Dict[str, Any]:
        """The section mapping; empty when the key is absent or null."""
        return self._config.get(self._config_section()) or {}


__all__ = ["BaseDomainConfig"]
