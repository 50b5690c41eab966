"""Prompt composition engine.

- types: Operation variants, PromptDocument, ContentSection, CompiledDocument
- context: WalkContext (per-walk recursion stack, base dir, word budget)
- parser: YAML decoding + schema validation
- validator: side-effect-free cycle/structure walk
- executor: ordered, budgeted execution walk
- renderer: delimiter styles and final text
- engine: validate -> execute -> render
"""
from __future__ import annotations

from .context import WalkContext
from .engine import compile_document, compile_prompt, write_output
from .executor import execute_document, execute_operation
from .parser import load_document, parse_document
from .renderer import DELIMITER_STYLES, format_section_header, render
from .types import (
    CommandRef,
    CompiledDocument,
    ContentSection,
    FileRef,
    Operation,
    OperationKind,
    PromptDocument,
    PromptRef,
    TextLiteral,
    operation_from_mapping,
)
from .validator import validate_document

__all__ = [
    "WalkContext",
    "compile_document",
    "compile_prompt",
    "write_output",
    "execute_document",
    "execute_operation",
    "load_document",
    "parse_document",
    "DELIMITER_STYLES",
    "format_section_header",
    "render",
    "CommandRef",
    "CompiledDocument",
    "ContentSection",
    "FileRef",
    "Operation",
    "OperationKind",
    "PromptDocument",
    "PromptRef",
    "TextLiteral",
    "operation_from_mapping",
    "validate_document",
]
