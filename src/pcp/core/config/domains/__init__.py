"""Domain-specific configuration accessors."""
from .compile import CompileConfig
from .logging import LoggingConfig

__all__ = ["CompileConfig", "LoggingConfig"]
