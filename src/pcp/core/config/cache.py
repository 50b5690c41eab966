"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys include the PCP_* environment and the project config
file's modification time so that changed inputs never yield stale config.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

_config_cache: Dict[Tuple[Any, ...], Dict[str, Any]] = {}


def _cache_key(project_root: Optional[Path]) -> Tuple[Any, ...]:
    from .manager import ENV_PREFIX, PROJECT_CONFIG_NAMES

    root = (project_root or Path.cwd()).resolve()
    env_items = tuple(
        sorted((k, v) for k, v in os.environ.items() if k.startswith(ENV_PREFIX))
    )
    mtimes = []
    for name in PROJECT_CONFIG_NAMES:
        candidate = root / name
        if candidate.exists():
            mtimes.append((name, candidate.stat().st_mtime_ns))
    return (str(root), env_items, tuple(mtimes))


def get_cached_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Return merged configuration, loading it on first use per cache key."""
    key = _cache_key(project_root)
    cached = _config_cache.get(key)
    if cached is None:
        from .manager import ConfigManager

        cached = ConfigManager(project_root=project_root).load_config()
        _config_cache[key] = cached
    return cached


def clear_all_caches() -> None:
    """Drop every cached configuration (useful for testing)."""
    _config_cache.clear()


__all__ = ["get_cached_config", "clear_all_caches"]
