"""Per-invocation project configuration.

Built once by the CLI from its options (each with an environment variable
fallback, see ``skills_lock.constants``) and handed to every command.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from pathlib import Path

from skills_lock.constants import (
    DEFAULT_INSTALLER_COMMAND,
    LOCKFILE_NAME,
    SKILL_DIRS,
)


@dataclass(frozen=True)
class ProjectConfig:
    """Where the project lives and how to reach the external installer.

    Attributes:
        project_dir: Root of the project whose skills are managed.
        lockfile_path: Absolute path of the lockfile.
        installer_command: Launcher for the ``skills`` CLI, split into argv.
        skill_dirs: Directories (relative to ``project_dir``) scanned for
            installed skills.
    """

    project_dir: Path
    lockfile_path: Path
    installer_command: tuple[str, ...] = tuple(shlex.split(DEFAULT_INSTALLER_COMMAND))
    skill_dirs: tuple[str, ...] = field(default=SKILL_DIRS)

    @classmethod
    def build(
        cls,
        project_dir: str | Path | None = None,
        lockfile: str | Path | None = None,
        installer_command: str | None = None,
    ) -> ProjectConfig:
        """Resolve raw option values into a ``ProjectConfig``.

        A relative ``lockfile`` is taken relative to the project directory,
        not the process working directory.
        """
        root = Path(project_dir) if project_dir else Path.cwd()
        root = root.resolve()
        lock_path = Path(lockfile) if lockfile else Path(LOCKFILE_NAME)
        if not lock_path.is_absolute():
            lock_path = root / lock_path
        command = tuple(shlex.split(installer_command or DEFAULT_INSTALLER_COMMAND))
        return cls(project_dir=root, lockfile_path=lock_path, installer_command=command)
