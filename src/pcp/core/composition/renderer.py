"""Section header formatting and final serialization."""
from __future__ import annotations

from typing import Dict, Iterable, Tuple

from .types import CompiledDocument, ContentSection

DELIMITER_STYLES: Tuple[str, ...] = ("xml", "minimal", "full", "none")
DEFAULT_STYLE = "xml"

_HEADER_TEMPLATES: Dict[str, str] = {
    "xml": "\n<!-- pcp-source: {source} -->\n",
    "minimal": "\n=== PCP SOURCE: {source} ===\n",
    "full": (
        "\n----------------------------------\n"
        "BEGIN: {source}\n"
        "----------------------------------\n"
    ),
    "none": "\n",
}


def format_section_header(source: str, style: str) -> str:
    """Return the header that precedes a section from ``source``.

    Unknown styles render as ``xml``. The ``none`` style yields a bare
    newline so sections stay separated without a label.
    """
    template = _HEADER_TEMPLATES.get(style, _HEADER_TEMPLATES[DEFAULT_STYLE])
    # str.replace rather than format(): sources are arbitrary text and may contain braces.
    return template.replace("{source}", source)


def _terminate(content: str) -> str:
    return content.rstrip("\n") + "\n"


def render_sections(sections: Iterable[ContentSection], style: str) -> str:
    """Serialize top-level sections with headers.

    Each section's content is emitted with exactly one trailing newline and
    the first header's leading newlines are trimmed, so the result never
    starts with blank lines and always ends with exactly one newline.
    """
    parts = []
    for i, section in enumerate(sections):
        if style != "none":
            header = format_section_header(section.source, style)
            parts.append(header.lstrip("\n") if i == 0 else header)
        parts.append(_terminate(section.content))
    return "".join(parts).rstrip("\n") + "\n"


def render(compiled: CompiledDocument, style: str = DEFAULT_STYLE) -> str:
    """Render a compiled document into its final text."""
    return render_sections(compiled.sections, style)


__all__ = [
    "DELIMITER_STYLES",
    "DEFAULT_STYLE",
    "format_section_header",
    "render_sections",
    "render",
]
