"""The external installer: the ``skills`` CLI that actually places files.

skills-lock never copies skill files itself. It hands a local directory (or
a source the installer understands) to ``skills add`` and asks ``skills
remove`` to delete things. ``SkillInstaller`` is the seam; ``SkillsCli`` is
the real implementation, and tests substitute their own.

Invocations inherit stdin/stdout/stderr because the installer may prompt,
so they run one at a time.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from skills_lock.constants import DEFAULT_INSTALLER_COMMAND
from skills_lock.exceptions import InstallerError, InstallerUnavailableError

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
_EXIT_NOT_FOUND = 127


class SkillInstaller(ABC):
    """Places and removes installed skills on behalf of skills-lock."""

    @abstractmethod
    def install(self, source: str, skill_name: str) -> None:
        """Install ``skill_name`` from ``source`` (a URL or local path).

        Raises:
            InstallerError: If the installation fails.
        """

    @abstractmethod
    def remove(self, skill_name: str) -> None:
        """Remove the installed skill called ``skill_name``.

        Raises:
            InstallerError: If the removal fails.
        """


def _unavailable(command: Sequence[str]) -> InstallerUnavailableError:
    return InstallerUnavailableError(
        f"The 'skills' CLI is not available (tried: {' '.join(command)}). "
        "Install Node.js and run: npm install -g skills"
    )


class SkillsCli(SkillInstaller):
    """Installer backed by ``npx skills add`` / ``npx skills remove``.

    Always passes ``--skill <name>`` (exactly as given) and ``--yes``, and
    never ``--global``, so installs land in the project directory.

    Construct it with ``SkillsCli.detect()`` to check once, up front, that
    the CLI can run at all.
    """

    def __init__(
        self,
        command: Sequence[str] = tuple(DEFAULT_INSTALLER_COMMAND.split()),
        cwd: Path | None = None,
    ) -> None:
        self.command = tuple(command)
        self.cwd = cwd

    @classmethod
    def detect(
        cls,
        command: Sequence[str] = tuple(DEFAULT_INSTALLER_COMMAND.split()),
        cwd: Path | None = None,
    ) -> SkillsCli:
        """Probe the CLI with ``--version`` and return an installer for it.

        Raises:
            InstallerUnavailableError: If the launcher is missing or the
                probe exits non-zero.
        """
        probe = [*command, "--version"]
        logger.debug("Probing installer: %s", " ".join(probe))
        try:
            result = subprocess.run(
                probe,
                cwd=cwd,
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
            )
        except (FileNotFoundError, PermissionError):
            raise _unavailable(command) from None
        if result.returncode != 0:
            logger.debug("Installer probe failed: %s", result.stderr.strip())
            raise _unavailable(command)
        return cls(command, cwd)

    def install(self, source: str, skill_name: str) -> None:
        self._run(["add", source, "--skill", skill_name, "--yes"], skill_name)

    def remove(self, skill_name: str) -> None:
        self._run(["remove", "--skill", skill_name, "--yes"], skill_name)

    def _run(self, args: list[str], skill_name: str) -> None:
        cmd = [*self.command, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, cwd=self.cwd)
        except (FileNotFoundError, PermissionError):
            raise _unavailable(self.command) from None
        if result.returncode == _EXIT_NOT_FOUND:
            raise _unavailable(self.command)
        if result.returncode != 0:
            raise InstallerError(
                f"'skills {args[0]}' failed for '{skill_name}' "
                f"(exit code {result.returncode})"
            )
