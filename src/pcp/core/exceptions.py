from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Sequence


class PcpError(Exception):
    """Base exception for pcp."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(PcpError, ValueError):
    """Raised when configuration is malformed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        PcpError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class InvalidYAMLError(PcpError):
    """Raised when a prompt document is not valid YAML."""

    def __init__(self, file: Path | str, error: Exception) -> None:
        super().__init__(
            f"invalid YAML in file {file}: {error}",
            context={"file": str(file)},
        )
        self.file = str(file)
        self.error = error


class DocumentSchemaError(PcpError):
    """Raised when a prompt document does not have the expected shape."""


class OperationError(DocumentSchemaError):
    """An operation entry does not populate exactly one of its variants."""

    reason = "operation must specify exactly one of: file, prompt, command, text"

    def __init__(
        self,
        *,
        document: Path | str | None = None,
        index: int | None = None,
        keys: Sequence[str] = (),
    ) -> None:
        ctx: Dict[str, Any] = {}
        where = ""
        if document is not None:
            ctx["document"] = str(document)
            where = f"validation failed for {document}: "
        if index is not None:
            ctx["index"] = index
            where += f"operation {index}: "
        if keys:
            ctx["keys"] = list(keys)
        super().__init__(f"{where}{self.reason}", context=ctx)
        self.keys = tuple(keys)


class OperationEmptyError(OperationError):
    """Raised when an operation entry populates no variant."""


class OperationMultipleError(OperationError):
    """Raised when an operation entry populates more than one variant."""


class SourceFileNotFoundError(PcpError, FileNotFoundError):
    """Raised when a referenced file or document does not exist."""

    def __init__(self, file: Path | str) -> None:
        PcpError.__init__(self, f"file not found: {file}", context={"file": str(file)})
        FileNotFoundError.__init__(self, f"file not found: {file}")
        self.file = str(file)

    def __str__(self) -> str:
        return f"file not found: {self.file}"


class SourceReadError(PcpError):
    """Raised when an existing file cannot be read."""

    def __init__(self, file: Path | str, error: OSError) -> None:
        super().__init__(f"failed to read file {file}: {error}", context={"file": str(file)})
        self.file = str(file)
        self.error = error


class BinaryFileError(PcpError):
    """Raised when a file reference points at binary content."""

    def __init__(self, file: Path | str) -> None:
        super().__init__(f"cannot process binary file: {file}", context={"file": str(file)})
        self.file = str(file)


class CircularReferenceError(PcpError):
    """Raised when a prompt document is already on the recursion stack.

    ``path`` holds the documents on the stack, outermost first, followed by
    the document that closed the cycle.
    """

    def __init__(self, file: Path | str, path: Sequence[Path | str]) -> None:
        self.file = str(file)
        self.path = [str(p) for p in path]
        chain = " -> ".join(self.path)
        super().__init__(
            f"circular reference detected in file {self.file} (reference path: {chain})",
            context={"file": self.file, "path": list(self.path)},
        )


class CommandFailedError(PcpError):
    """Raised when a command cannot be spawned or exits with a status other than 0 or 1."""

    def __init__(self, command: str, error: Any, *, exit_code: int | None = None) -> None:
        ctx: Dict[str, Any] = {"command": command}
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        super().__init__(f"command execution failed: {command} ({error})", context=ctx)
        self.command = command
        self.error = error
        self.exit_code = exit_code


class WordLimitExceededError(PcpError):
    """Raised as soon as the running word total passes the configured ceiling."""

    def __init__(self, current: int, limit: int) -> None:
        super().__init__(
            f"compiled output ({current} words) exceeds maximum word limit ({limit} words)",
            context={"current": current, "limit": limit},
        )
        self.current = current
        self.limit = limit


__all__ = [
    "PcpError",
    "ConfigError",
    "InvalidYAMLError",
    "DocumentSchemaError",
    "OperationError",
    "OperationEmptyError",
    "OperationMultipleError",
    "SourceFileNotFoundError",
    "SourceReadError",
    "BinaryFileError",
    "CircularReferenceError",
    "CommandFailedError",
    "WordLimitExceededError",
]
