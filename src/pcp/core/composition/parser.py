"""Prompt document parsing.

Parsing is purely structural: YAML is decoded, the payload is checked
against the bundled JSON Schema, and each entry becomes an Operation.
Nothing is resolved or executed here.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import Draft202012Validator

from pcp.core.exceptions import DocumentSchemaError, InvalidYAMLError, SourceFileNotFoundError
from pcp.data import read_yaml as read_data_yaml

from .types import Operation, PromptDocument, operation_from_mapping

logger = logging.getLogger(__name__)

SCHEMA_FILE = "prompt-document.schema.yaml"


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema = read_data_yaml("schemas", SCHEMA_FILE)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def _format_schema_error(error: Any) -> str:
    location = "/".join(str(p) for p in error.absolute_path)
    if error.validator == "required" and not location:
        return "missing required 'prompt' key"
    return f"{location or 'document'}: {error.message}"


def validate_payload(payload: Any, *, source: Path | str) -> Dict[str, Any]:
    """Check a decoded document against the prompt document schema."""
    if payload is None:
        raise DocumentSchemaError(
            f"validation failed for {source}: missing required 'prompt' key",
            context={"document": str(source)},
        )
    errors = sorted(_validator().iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        details = "; ".join(_format_schema_error(e) for e in errors[:5])
        raise DocumentSchemaError(
            f"validation failed for {source}: {details}",
            context={"document": str(source), "errors": len(errors)},
        )
    return payload


def parse_document(text: str, *, source: Path | str = "<string>", path: Optional[Path] = None) -> PromptDocument:
    """Parse document text into a PromptDocument.

    Raises:
        InvalidYAMLError: The text is not valid YAML.
        DocumentSchemaError: The payload does not match the document schema,
            including OperationEmptyError / OperationMultipleError for entries
            that do not populate exactly one variant.
    """
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidYAMLError(source, exc) from exc

    data = validate_payload(payload, source=source)
    operations: List[Operation] = [
        operation_from_mapping(entry, document=source, index=i)
        for i, entry in enumerate(data["prompt"])
    ]
    return PromptDocument(operations=tuple(operations), path=path)


def load_document(path: Path | str) -> PromptDocument:
    """Read and parse the prompt document at ``path``.

    Raises:
        SourceFileNotFoundError: The file does not exist or cannot be read.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise SourceFileNotFoundError(path) from exc
    document = parse_document(raw.decode("utf-8", errors="replace"), source=path, path=path)
    logger.debug("parsed %s (%d operations)", path, len(document))
    return document


__all__ = ["SCHEMA_FILE", "validate_payload", "parse_document", "load_document"]
