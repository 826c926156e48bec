"""Thin wrapper around the ``git`` executable.

Every clone, checkout and rev-parse goes through ``run_git`` so that failures
surface uniformly as ``ResolutionError`` carrying git's own stderr.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from skills_lock.exceptions import ResolutionError

logger = logging.getLogger(__name__)

GIT = "git"


def run_git(
    args: list[str],
    cwd: Path | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run a git command and capture its output.

    Args:
        args: Git command arguments (without the ``git`` prefix).
        cwd: Working directory. Defaults to the current directory.
        check: Whether to raise on a non-zero exit.

    Returns:
        The completed process, with text stdout/stderr.

    Raises:
        ResolutionError: If git is missing, or exits non-zero and ``check``.
    """
    cmd = [GIT, *args]
    logger.debug("Running %s (cwd=%s)", " ".join(cmd), cwd or ".")
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            stdin=subprocess.DEVNULL,
        )
    except FileNotFoundError:
        raise ResolutionError("git is not installed or not in PATH") from None

    if check and result.returncode != 0:
        detail = result.stderr.strip() or f"exit code {result.returncode}"
        raise ResolutionError(f"git {args[0]} failed: {detail}")
    return result
