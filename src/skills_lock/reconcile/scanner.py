"""Discovery of skills already installed in a project.

``.agents/skills/`` is the canonical location; ``.claude/skills/`` usually
holds symlinks into it and is scanned only as a fallback. A skill is any
directory (or symlink to one) under those roots; it counts as installed even
without a manifest.
"""

from __future__ import annotations

import logging
from pathlib import Path

from skills_lock.constants import MANIFEST_FILENAME, SKILL_DIRS
from skills_lock.integrity import read_skill_metadata
from skills_lock.reconcile.models import InstalledSkill

logger = logging.getLogger(__name__)


class SkillScanner:
    """Lists installed skills under a project's skill directories.

    Usage::

        scanner = SkillScanner(Path.cwd())
        for skill in scanner.scan():
            print(skill.name, skill.metadata)
    """

    def __init__(self, project_dir: Path, skill_dirs: tuple[str, ...] = SKILL_DIRS) -> None:
        self.project_dir = Path(project_dir).resolve()
        self.skill_dirs = skill_dirs

    def _roots(self) -> list[Path]:
        return [self.project_dir / d for d in self.skill_dirs]

    def _load(self, name: str, path: Path) -> InstalledSkill | None:
        try:
            if not path.is_dir():
                return None
        except OSError:
            logger.warning("Cannot inspect %s", path, exc_info=True)
            return None
        return InstalledSkill(
            name=name,
            disk_path=path,
            has_manifest=(path / MANIFEST_FILENAME).is_file(),
            metadata=read_skill_metadata(path),
        )

    def scan(self) -> list[InstalledSkill]:
        """Return every installed skill, deduplicated by name (first root wins)."""
        seen: set[str] = set()
        skills: list[InstalledSkill] = []
        for root in self._roots():
            if not root.is_dir():
                continue
            for child in sorted(root.iterdir(), key=lambda p: p.name):
                if child.name in seen:
                    continue
                skill = self._load(child.name, child)
                if skill is None:
                    continue
                seen.add(child.name)
                skills.append(skill)
        logger.debug("Scanned %d installed skill(s) in %s", len(skills), self.project_dir)
        return skills

    def find(self, name: str) -> InstalledSkill | None:
        """Return the installed skill called ``name``, or None."""
        for root in self._roots():
            skill = self._load(name, root / name)
            if skill is not None:
                return skill
        return None
