"""Domain-specific configuration for compilation defaults."""
from __future__ import annotations

from functools import cached_property

from pcp.core.composition.renderer import DELIMITER_STYLES
from pcp.core.exceptions import ConfigError
from pcp.core.utils.io.core import BINARY_SNIFF_BYTES
from pcp.core.utils.subprocess import DEFAULT_SHELL

from ..base import BaseDomainConfig

DEFAULT_MAX_WORDS = 128000
DEFAULT_DELIMITER_STYLE = "xml"


class CompileConfig(BaseDomainConfig):
    """Accessors for the ``compile`` section."""

    def _config_section(self) -> str:
        return "compile"

    @cached_property
    def max_words(self) -> int:
        raw = self.section.get("max_words", DEFAULT_MAX_WORDS)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            raise ConfigError(
                f"compile.max_words must be a non-negative integer, got {raw!r}",
                context={"key": "compile.max_words"},
            )
        return raw

    @cached_property
    def delimiter_style(self) -> str:
        style = str(self.section.get("delimiter_style", DEFAULT_DELIMITER_STYLE))
        if style not in DELIMITER_STYLES:
            raise ConfigError(
                f"compile.delimiter_style must be one of: {', '.join(DELIMITER_STYLES)} (got '{style}')",
                context={"key": "compile.delimiter_style"},
            )
        return style

    @cached_property
    def binary_sniff_bytes(self) -> int:
        raw = self.section.get("binary_sniff_bytes", BINARY_SNIFF_BYTES)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
            raise ConfigError(
                f"compile.binary_sniff_bytes must be a positive integer, got {raw!r}",
                context={"key": "compile.binary_sniff_bytes"},
            )
        return raw

    @cached_property
    def shell(self) -> str:
        return str(self.section.get("shell") or DEFAULT_SHELL)


__all__ = ["CompileConfig", "DEFAULT_MAX_WORDS", "DEFAULT_DELIMITER_STYLE"]
