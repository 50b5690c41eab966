"""File primitives used by the engine and the CLI.

Reads are exact: no newline translation, UTF-8 with replacement. Writes
go through a locked temp file in the target directory and a rename, so a
reader never sees a partially written output file.
"""
from __future__ import annotations

import fcntl
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

PathLike = Union[str, Path]

logger = logging.getLogger(__name__)

BINARY_SNIFF_BYTES = 512


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Call ``write_fn`` on a temp file beside ``path``, then rename it over ``path``.

    Missing parent directories are created. On failure the temp file is
    removed and ``path`` is left untouched.
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            newline="",
            dir=str(path.parent),
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        os.chmod(tmp_path, 0o644)
        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                logger.debug("could not remove temp file %s", tmp_path)


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""
    target = Path(path)

    def _writer(f: TextIO) -> None:
        f.write(content)

    atomic_write(target, _writer)


def is_binary_file(path: PathLike, sniff_bytes: int = BINARY_SNIFF_BYTES) -> bool:
    """Return True when the first ``sniff_bytes`` bytes of ``path`` contain a NUL byte.

    A file that cannot be opened or read is reported as not binary; the
    caller's full read surfaces the real I/O error.
    """
    try:
        with open(path, "rb") as f:
            head = f.read(sniff_bytes)
    except OSError:
        return False
    return b"\x00" in head


def read_text_exact(path: PathLike) -> str:
    """Read ``path`` as UTF-8 without newline translation.

    Invalid byte sequences are replaced so that any non-binary file yields
    text deterministically.
    """
    return Path(path).read_bytes().decode("utf-8", errors="replace")


__all__ = [
    "PathLike",
    "BINARY_SNIFF_BYTES",
    "ensure_parent_dir",
    "atomic_write",
    "write_text",
    "is_binary_file",
    "read_text_exact",
]
