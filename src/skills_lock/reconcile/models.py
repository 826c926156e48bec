"""Data models for reconciliation: installed skills, decisions, and reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from skills_lock.core.lockfile import SkillEntry
from skills_lock.integrity import SkillMetadata


@dataclass(frozen=True)
class InstalledSkill:
    """A skill directory found on disk by the scanner.

    Attributes:
        name: Directory name under one of the skill directories.
        disk_path: Absolute path of the skill directory.
        has_manifest: Whether the directory contains the manifest file.
        metadata: Sidecar contents, or None if absent or unusable.
    """

    name: str
    disk_path: Path
    has_manifest: bool
    metadata: SkillMetadata | None = None


class SkillState(str, Enum):
    """Per-skill progress through one reconciliation pass.

    ``UNCHECKED -> SATISFIED`` (terminal), or
    ``UNCHECKED -> DRIFTED -> INSTALLING -> VERIFIED | FAILED`` (terminal).
    """

    UNCHECKED = "unchecked"
    SATISFIED = "satisfied"
    DRIFTED = "drifted"
    INSTALLING = "installing"
    VERIFIED = "verified"
    FAILED = "failed"


class DriftReason(str, Enum):
    """Why a locked skill does not match what is on disk."""

    NOT_INSTALLED = "not installed"
    UNVERIFIED = "installed without skills-lock metadata"
    WRONG_REF = "installed at a different ref"
    MODIFIED = "files modified since install"
    FORCED = "reinstall forced"


@dataclass
class Decision:
    """The outcome of comparing one lock entry with the disk.

    Attributes:
        name: Skill name.
        entry: The lock entry being reconciled.
        installed: What the scanner found under that name, if anything.
        state: ``SATISFIED`` or ``DRIFTED`` once decided.
        reason: Set when ``state`` is ``DRIFTED``.
    """

    name: str
    entry: SkillEntry
    installed: InstalledSkill | None
    state: SkillState = SkillState.UNCHECKED
    reason: DriftReason | None = None

    @property
    def needs_install(self) -> bool:
        return self.state is SkillState.DRIFTED


@dataclass(frozen=True)
class InstallOutcome:
    """A skill that finished a pass, either already satisfied or freshly verified."""

    name: str
    state: SkillState
    ref: str
    integrity: str | None
    reason: DriftReason | None = None


@dataclass
class InstallReport:
    """Result of ``install_from_lockfile``."""

    decisions: list[Decision] = field(default_factory=list)
    outcomes: list[InstallOutcome] = field(default_factory=list)
    lockfile_updated: bool = False

    @property
    def installed(self) -> list[InstallOutcome]:
        return [o for o in self.outcomes if o.state is SkillState.VERIFIED]


@dataclass
class CheckReport:
    """Result of a read-only comparison of lockfile and disk."""

    missing: list[str] = field(default_factory=list)
    extra: list[str] = field(default_factory=list)
    wrong_ref: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    unverified: list[str] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        return not (
            self.missing or self.extra or self.wrong_ref or self.modified or self.unverified
        )
