"""The operations behind each CLI command: install, add, update, remove, check.

Everything runs one skill at a time. Lockfile changes are written as soon as
each skill succeeds, so an interrupted multi-skill run keeps the work it
already finished.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from skills_lock.constants import ROOT_SKILL_PATH
from skills_lock.core.lockfile import (
    Lockfile,
    LockfileDiff,
    SkillEntry,
    diff_lockfiles,
    write_lockfile,
)
from skills_lock.exceptions import AlreadyLockedError, NotFoundError, ResolutionError
from skills_lock.integrity import compute_skill_hash
from skills_lock.reconcile.installer import SkillInstaller
from skills_lock.reconcile.models import (
    CheckReport,
    Decision,
    DriftReason,
    InstalledSkill,
    InstallReport,
)
from skills_lock.reconcile.policy import Reconciler, decide, satisfied_outcome
from skills_lock.reconcile.scanner import SkillScanner
from skills_lock.resolver import (
    ResolvedSkill,
    ResolveOptions,
    expand_source,
    find_skills,
    resolve_ref,
    shallow_checkout,
    skill_dir_in_checkout,
)

logger = logging.getLogger(__name__)

InstallerFactory = Callable[[], SkillInstaller]


def plan(
    lockfile: Lockfile,
    installed: list[InstalledSkill],
    *,
    force: bool = False,
    verify_content: bool = False,
) -> list[Decision]:
    """Decide, in name order, what every locked skill needs."""
    by_name = {skill.name: skill for skill in installed}
    decisions = []
    for name in lockfile.skill_names:
        current = by_name.get(name)
        live = None
        if verify_content and current is not None and current.metadata is not None:
            live = compute_skill_hash(current.disk_path)
        decisions.append(
            decide(name, lockfile.skills[name], current, force=force, live_integrity=live)
        )
    return decisions


def install_from_lockfile(
    lockfile: Lockfile,
    lock_path: Path,
    scanner: SkillScanner,
    installer_factory: InstallerFactory,
    *,
    force: bool = False,
    verify_content: bool = False,
    on_decision: Callable[[Decision], None] | None = None,
) -> InstallReport:
    """Bring the disk in line with ``lockfile``.

    The installer is only requested from ``installer_factory`` when at
    least one skill actually needs installing. Entries without a recorded
    integrity receive the freshly computed one, and the lockfile is saved
    after each such update.
    """
    report = InstallReport(
        decisions=plan(lockfile, scanner.scan(), force=force, verify_content=verify_content)
    )
    reconciler: Reconciler | None = None

    for decision in report.decisions:
        if on_decision is not None:
            on_decision(decision)
        if decision.needs_install and reconciler is None:
            reconciler = Reconciler(installer_factory(), scanner)
        if reconciler is None:
            report.outcomes.append(satisfied_outcome(decision))
            continue

        outcome = reconciler.reconcile(decision)
        report.outcomes.append(outcome)
        if decision.entry.integrity is None and outcome.integrity is not None:
            lockfile.skills[decision.name] = replace(decision.entry, integrity=outcome.integrity)
            write_lockfile(lockfile, lock_path)
            report.lockfile_updated = True

    return report


def select_skill(skills: list[ResolvedSkill], name: str, source: str) -> ResolvedSkill:
    """Pick the skill called ``name`` from a repository's discovered skills.

    A repository whose only skill sits at its root matches any name.

    Raises:
        ResolutionError: If no skill, or more than one, matches.
    """
    matches = [skill for skill in skills if skill.name == name]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise ResolutionError(
            f"Skill '{name}' is ambiguous in {source}",
            available=[skill.path for skill in matches],
        )
    if len(skills) == 1 and skills[0].path == ROOT_SKILL_PATH:
        return skills[0]
    raise ResolutionError(
        f"Skill '{name}' not found in {source}",
        available=sorted({skill.name for skill in skills}),
    )


def add_skill(
    lockfile: Lockfile | None,
    lock_path: Path,
    source: str,
    name: str,
    scanner: SkillScanner,
    installer: SkillInstaller,
    *,
    branch: str | None = None,
    force: bool = False,
) -> SkillEntry:
    """Resolve, install, hash and pin one skill, then save the lockfile.

    Raises:
        AlreadyLockedError: If ``name`` is already locked and not ``force``.
        ResolutionError: If the source cannot be cloned or has no such skill.
    """
    lockfile = lockfile if lockfile is not None else Lockfile()
    if name in lockfile.skills and not force:
        raise AlreadyLockedError(f"'{name}' is already in skills.lock")

    canonical = expand_source(source)
    if Path(source).is_dir():
        canonical = str(Path(source).resolve())

    with shallow_checkout(canonical, ResolveOptions(ref=branch)) as checkout:
        chosen = select_skill(find_skills(checkout, canonical), name, canonical)

    entry = SkillEntry(source=canonical, path=chosen.path, ref=chosen.ref)
    outcome = Reconciler(installer, scanner).install(name, entry, scanner.find(name))
    entry.integrity = outcome.integrity

    lockfile.skills[name] = entry
    write_lockfile(lockfile, lock_path)
    logger.info("Locked %s at %s", name, entry.ref)
    return entry


def update_skills(
    lockfile: Lockfile,
    lock_path: Path,
    scanner: SkillScanner,
    installer_factory: InstallerFactory,
    names: list[str] | None = None,
    *,
    on_checked: Callable[[str, str, str], None] | None = None,
) -> LockfileDiff:
    """Move locked skills to the current tip of their source's default branch.

    Args:
        names: Skills to update; all of them when None or empty.
        on_checked: Called with ``(name, old_ref, new_ref)`` for every
            skill checked, before any reinstall.

    Returns:
        The difference between the lockfile before and after.

    Raises:
        NotFoundError: If a requested name is not in the lockfile.
    """
    for name in names or []:
        if name not in lockfile.skills:
            raise NotFoundError(f"Skill '{name}' not found in skills.lock")

    before = lockfile.copy()
    reconciler: Reconciler | None = None

    for name in names or lockfile.skill_names:
        entry = lockfile.skills[name]
        with shallow_checkout(entry.source) as checkout:
            latest = resolve_ref(checkout)
            if latest != entry.ref:
                skill_dir_in_checkout(checkout, entry.path)

        if on_checked is not None:
            on_checked(name, entry.ref, latest)
        if latest == entry.ref:
            continue

        if reconciler is None:
            reconciler = Reconciler(installer_factory(), scanner)
        updated = replace(entry, ref=latest, integrity=None)
        outcome = reconciler.install(name, updated, scanner.find(name))
        lockfile.skills[name] = replace(updated, integrity=outcome.integrity)
        write_lockfile(lockfile, lock_path)

    return diff_lockfiles(before, lockfile)


def remove_skill(
    name: str,
    lockfile: Lockfile | None,
    lock_path: Path,
    installer: SkillInstaller,
) -> bool:
    """Unlock and uninstall ``name``.

    Returns:
        True if ``name`` was in the lockfile.
    """
    was_locked = lockfile is not None and name in lockfile.skills
    if was_locked:
        del lockfile.skills[name]
        write_lockfile(lockfile, lock_path)
    installer.remove(name)
    return was_locked


def check_skills(
    lockfile: Lockfile,
    installed: list[InstalledSkill],
    *,
    verify_content: bool = False,
) -> CheckReport:
    """Compare the lockfile with the disk without changing anything."""
    report = CheckReport()
    buckets = {
        DriftReason.NOT_INSTALLED: report.missing,
        DriftReason.UNVERIFIED: report.unverified,
        DriftReason.WRONG_REF: report.wrong_ref,
        DriftReason.MODIFIED: report.modified,
    }
    for decision in plan(lockfile, installed, verify_content=verify_content):
        if decision.reason is not None:
            buckets[decision.reason].append(decision.name)
    report.extra = sorted(skill.name for skill in installed if skill.name not in lockfile.skills)
    return report
