"""Lockfile data models: SkillEntry, Lockfile, and LockfileDiff.

Pure data holders with their serialisation to plain dicts. Parsing,
validation, and disk I/O live in ``operations`` so this module stays free of
import cycles.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any

from skills_lock.constants import LOCKFILE_VERSION


@dataclass
class SkillEntry:
    """One locked skill.

    Attributes:
        source: Canonical clone URL (or local path) of the source repo.
        path: Slash-separated location of the skill directory inside the
            repo, ``"."`` for a skill at the repo root.
        ref: Full 40-character lowercase hex commit SHA.
        integrity: ``sha256:<hex>`` content hash of the installed skill at
            ``ref``, or None when not yet recorded.
    """

    source: str
    path: str
    ref: str
    integrity: str | None = None

    def to_dict(self) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "source": self.source,
            "path": self.path,
            "ref": self.ref,
        }
        if self.integrity is not None:
            entry["integrity"] = self.integrity
        return entry


@dataclass
class Lockfile:
    """The ``skills.lock`` document.

    ``skills`` keeps whatever order entries were inserted in; only the
    serialised form is sorted by name.

    Example::

        lf = Lockfile()
        lf.skills["pdf"] = SkillEntry(
            source="https://github.com/anthropics/skills.git",
            path="skills/pdf",
            ref="0123456789abcdef0123456789abcdef01234567",
        )
        lf.write(Path("skills.lock"))
    """

    version: int = LOCKFILE_VERSION
    skills: dict[str, SkillEntry] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict, keeping the in-memory skill order."""
        return {
            "version": self.version,
            "skills": {name: entry.to_dict() for name, entry in self.skills.items()},
        }

    def sorted(self) -> Lockfile:
        """Return a copy whose ``skills`` are ordered by ascending name."""
        return Lockfile(
            version=self.version,
            skills={name: copy.copy(self.skills[name]) for name in sorted(self.skills)},
        )

    def to_json(self) -> str:
        """Return the canonical on-disk text: sorted, 2-space indent, one trailing newline."""
        return json.dumps(self.sorted().to_dict(), indent=2, ensure_ascii=False) + "\n"

    def copy(self) -> Lockfile:
        return copy.deepcopy(self)

    @property
    def skill_names(self) -> list[str]:
        """Return sorted list of all skill names in the lockfile."""
        return sorted(self.skills)


@dataclass(frozen=True)
class LockfileDiff:
    """Names that differ between two lockfiles.

    Attributes:
        added: In the new lockfile only.
        removed: In the old lockfile only.
        changed: In both, with a different ``ref``.
    """

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    changed: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)
