"""Document model for prompt composition.

An operation is a closed sum type: one frozen dataclass per variant, built
through ``Operation.from_mapping`` which enforces that exactly one variant is
populated. Documents keep their operations in declaration order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type, Union

from pcp.core.exceptions import OperationEmptyError, OperationMultipleError


class OperationKind(str, Enum):
    """Operation variants, valued by their document key."""

    FILE = "file"
    PROMPT = "prompt"
    COMMAND = "command"
    TEXT = "text"


@dataclass(frozen=True)
class _OperationBase:
    kind: ClassVar[OperationKind]

    @property
    def value(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class FileRef(_OperationBase):
    """Include a file's contents; ``path`` is relative to the declaring document."""

    path: str
    kind: ClassVar[OperationKind] = OperationKind.FILE

    @property
    def value(self) -> str:
        return self.path


@dataclass(frozen=True)
class PromptRef(_OperationBase):
    """Expand a nested prompt document in place."""

    path: str
    kind: ClassVar[OperationKind] = OperationKind.PROMPT

    @property
    def value(self) -> str:
        return self.path


@dataclass(frozen=True)
class CommandRef(_OperationBase):
    """Include the combined output of a shell command."""

    command: str
    kind: ClassVar[OperationKind] = OperationKind.COMMAND

    @property
    def value(self) -> str:
        return self.command


@dataclass(frozen=True)
class TextLiteral(_OperationBase):
    """Include a literal string verbatim."""

    text: str
    kind: ClassVar[OperationKind] = OperationKind.TEXT

    @property
    def value(self) -> str:
        return self.text


Operation = Union[FileRef, PromptRef, CommandRef, TextLiteral]

_VARIANTS: Dict[str, Type[_OperationBase]] = {
    OperationKind.FILE.value: FileRef,
    OperationKind.PROMPT.value: PromptRef,
    OperationKind.COMMAND.value: CommandRef,
    OperationKind.TEXT.value: TextLiteral,
}


def operation_from_mapping(
    entry: Mapping[str, Any],
    *,
    document: Optional[Path | str] = None,
    index: Optional[int] = None,
) -> Operation:
    """Build an Operation from one document entry.

    Keys whose value is null count as unpopulated.

    Raises:
        OperationEmptyError: No variant key is populated.
        OperationMultipleError: More than one variant key is populated.
    """
    populated = [key for key in _VARIANTS if entry.get(key) is not None]
    if not populated:
        raise OperationEmptyError(document=document, index=index)
    if len(populated) > 1:
        raise OperationMultipleError(document=document, index=index, keys=populated)
    key = populated[0]
    return _VARIANTS[key](str(entry[key]))  # type: ignore[return-value]


@dataclass(frozen=True)
class PromptDocument:
    """A parsed prompt document: ordered operations plus where it came from."""

    operations: Tuple[Operation, ...] = ()
    path: Optional[Path] = None

    def __iter__(self):
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def prompt_refs(self) -> Tuple[PromptRef, ...]:
        return tuple(op for op in self.operations if isinstance(op, PromptRef))


@dataclass(frozen=True)
class ContentSection:
    """Resolved output of one operation.

    Attributes:
        source: Provenance label shown in section headers
        content: Resolved text
        kind: Kind of operation that produced the section
    """

    source: str
    content: str
    kind: OperationKind


@dataclass(frozen=True)
class CompiledDocument:
    """Ordered top-level sections of a compiled document."""

    sections: Tuple[ContentSection, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)


__all__ = [
    "OperationKind",
    "Operation",
    "FileRef",
    "PromptRef",
    "CommandRef",
    "TextLiteral",
    "operation_from_mapping",
    "PromptDocument",
    "ContentSection",
    "CompiledDocument",
]
