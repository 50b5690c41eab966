"""CLI choices sourced from the engine, so help text never drifts from it."""
from __future__ import annotations

from typing import List


def get_delimiter_style_choices() -> List[str]:
    """Return the delimiter styles the renderer supports."""
    from pcp.core.composition.renderer import DELIMITER_STYLES

    return list(DELIMITER_STYLES)


__all__ = ["get_delimiter_style_choices"]
