"""Reconciliation of the lockfile with the skills installed on disk.

Public API::

    from skills_lock.reconcile import SkillScanner, SkillsCli, install_from_lockfile

    scanner = SkillScanner(project_dir)
    report = install_from_lockfile(
        lockfile, lock_path, scanner, lambda: SkillsCli.detect(cwd=project_dir)
    )
"""

from __future__ import annotations

from skills_lock.reconcile.installer import SkillInstaller, SkillsCli
from skills_lock.reconcile.models import (
    CheckReport,
    Decision,
    DriftReason,
    InstalledSkill,
    InstallOutcome,
    InstallReport,
    SkillState,
)
from skills_lock.reconcile.policy import Reconciler, decide, satisfied_outcome
from skills_lock.reconcile.scanner import SkillScanner
from skills_lock.reconcile.workflows import (
    add_skill,
    check_skills,
    install_from_lockfile,
    plan,
    remove_skill,
    select_skill,
    update_skills,
)

__all__ = [
    "CheckReport",
    "Decision",
    "DriftReason",
    "InstallOutcome",
    "InstallReport",
    "InstalledSkill",
    "Reconciler",
    "SkillInstaller",
    "SkillScanner",
    "SkillState",
    "SkillsCli",
    "add_skill",
    "check_skills",
    "decide",
    "install_from_lockfile",
    "plan",
    "remove_skill",
    "satisfied_outcome",
    "select_skill",
    "update_skills",
]
