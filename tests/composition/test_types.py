from __future__ import annotations

import dataclasses

import pytest

from pcp.core.composition.types import (
    CommandRef,
    FileRef,
    OperationKind,
    PromptDocument,
    PromptRef,
    TextLiteral,
    operation_from_mapping,
)
from pcp.core.exceptions import (
    DocumentSchemaError,
    OperationEmptyError,
    OperationMultipleError,
)


@pytest.mark.parametrize(
    "entry, expected",
    [
        ({"file": "a.txt"}, FileRef("a.txt")),
        ({"prompt": "sub/nested.yml"}, PromptRef("sub/nested.yml")),
        ({"command": "echo hi"}, CommandRef("echo hi")),
        ({"text": "hello"}, TextLiteral("hello")),
    ],
)
def test_each_variant_builds_from_its_key(entry, expected):
    op = operation_from_mapping(entry)
    assert op == expected
    assert op.kind.value == next(iter(entry))
    assert op.value == next(iter(entry.values()))


def test_empty_entry_is_rejected():
    with pytest.raises(OperationEmptyError) as exc:
        operation_from_mapping({})
    assert "exactly one of: file, prompt, command, text" in str(exc.value)


def test_null_values_count_as_unpopulated():
    with pytest.raises(OperationEmptyError):
        operation_from_mapping({"file": None, "text": None})
    assert operation_from_mapping({"file": None, "text": "x"}) == TextLiteral("x")


def test_multiple_variants_are_rejected_with_keys():
    with pytest.raises(OperationMultipleError) as exc:
        operation_from_mapping({"file": "a.txt", "command": "ls"}, document="doc.yml", index=3)
    err = exc.value
    assert isinstance(err, DocumentSchemaError)
    assert err.keys == ("file", "command")
    assert err.context == {"document": "doc.yml", "index": 3, "keys": ["file", "command"]}
    assert str(err).startswith("validation failed for doc.yml: operation 3:")


def test_operations_are_immutable():
    op = FileRef("a.txt")
    with pytest.raises(dataclasses.FrozenInstanceError):
        op.path = "b.txt"  # type: ignore[misc]


def test_document_preserves_order_and_lists_prompt_refs():
    doc = PromptDocument(
        operations=(TextLiteral("a"), PromptRef("one.yml"), CommandRef("ls"), PromptRef("two.yml"))
    )
    assert [op.kind for op in doc] == [
        OperationKind.TEXT,
        OperationKind.PROMPT,
        OperationKind.COMMAND,
        OperationKind.PROMPT,
    ]
    assert [ref.path for ref in doc.prompt_refs()] == ["one.yml", "two.yml"]
    assert len(doc) == 4
