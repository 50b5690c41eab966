"""
pcp configuration management (YAML layers + PCP_* environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pcp.core.exceptions import ConfigError
from pcp.core.utils.io import read_yaml
from pcp.core.utils.merge import deep_merge
from pcp.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "PCP_"
CONFIG_PATH_ENV = "PCP_CONFIG"
PROJECT_CONFIG_NAMES = ("pcp.yml", "pcp.yaml")


class ConfigManager:
    """Load and merge pcp configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: PCP_<section>__<key>
    2. Project config: the file named by PCP_CONFIG, else pcp.yml / pcp.yaml
       in ``project_root`` (the working directory by default)
    3. Bundled defaults: pcp.data/config/defaults.yaml
    """

    def __init__(self, project_root: Optional[Path] = None) -> None:
        self.project_root = (project_root or Path.cwd()).resolve()
        self.defaults_path = get_data_path("config", "defaults.yaml")

    def project_config_path(self) -> Optional[Path]:
        """Return the project config file in effect, if any."""
        explicit = os.environ.get(CONFIG_PATH_ENV)
        if explicit:
            path = Path(explicit).expanduser()
            if not path.is_absolute():
                path = self.project_root / path
            if not path.exists():
                raise ConfigError(
                    f"{CONFIG_PATH_ENV} points to a missing file: {path}",
                    context={"key": CONFIG_PATH_ENV},
                )
            return path
        for name in PROJECT_CONFIG_NAMES:
            candidate = self.project_root / name
            if candidate.exists():
                return candidate
        return None

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except Exception as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}", context={"file": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping", context={"file": str(path)}
            )
        return data

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigError(
                f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                context={"key": f"{ENV_PREFIX}{raw}"},
            )
        # Normalize to lowercase so env overrides create canonical keys.
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key == CONFIG_PATH_ENV:
                continue
            raw = key[len(ENV_PREFIX):]
            if "__" not in raw:
                # Only nested section keys are configuration.
                continue
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if nxt is None:
                nxt = cur[part] = {}
            if not isinstance(nxt, dict):
                raise ConfigError(
                    f"Cannot override {'.'.join(path)}: '{part}' is not a section",
                    context={"key": ".".join(path)},
                )
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, value in self._iter_env_overrides():
            logger.debug("config override from environment: %s=%r", ".".join(path), value)
            self._set_nested(cfg, path, value)

    # ========== Loading ==========

    def load_config(self) -> Dict[str, Any]:
        """Return the merged configuration dictionary.

        Order: bundled defaults, project config, environment overrides.
        """
        cfg = self.load_yaml(self.defaults_path)
        project_path = self.project_config_path()
        if project_path is not None:
            logger.debug("loading project config from %s", project_path)
            cfg = deep_merge(cfg, self.load_yaml(project_path))
        self.apply_env_overrides(cfg)
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-separated path."""
        current: Any = self.load_config()
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current


__all__ = ["ConfigManager", "ENV_PREFIX", "CONFIG_PATH_ENV", "PROJECT_CONFIG_NAMES"]
