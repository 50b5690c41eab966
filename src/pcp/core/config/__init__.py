"""pcp configuration: layered YAML with environment overrides."""
from .manager import ConfigManager
from .cache import clear_all_caches, get_cached_config
from .domains import CompileConfig, LoggingConfig

__all__ = [
    "ConfigManager",
    "clear_all_caches",
    "get_cached_config",
    "CompileConfig",
    "LoggingConfig",
]
