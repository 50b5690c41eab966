"""Subprocess helpers for shell-string commands.

Commands declared in prompt documents are shell strings, so they are run
through an explicit shell executable. Output is captured with stderr merged
into stdout, in the order the process wrote it.
"""
from __future__ import annotations

import logging
import subprocess
from time import perf_counter

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/sh"


def run_shell(
    command: str,
    *,
    shell: str = DEFAULT_SHELL,
) -> subprocess.CompletedProcess:
    """Run ``command`` with ``shell -c`` and capture combined output.

    Blocks until the process exits; there is no timeout.

    Returns:
        CompletedProcess whose ``stdout`` holds stdout and stderr interleaved
        (decoded as UTF-8 with replacement) and whose ``returncode`` is
        negative when the process was killed by a signal.

    Raises:
        OSError: If the shell cannot be spawned.
    """
    started = perf_counter()
    completed = subprocess.run(
        [shell, "-c", command],
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        check=False,
    )
    logger.debug(
        "shell command finished in %.1fms with status %s: %s",
        (perf_counter() - started) * 1000,
        completed.returncode,
        command,
    )
    return subprocess.CompletedProcess(
        completed.args,
        completed.returncode,
        stdout=(completed.stdout or b"").decode("utf-8", errors="replace"),
        stderr=None,
    )


__all__ = ["DEFAULT_SHELL", "run_shell"]
