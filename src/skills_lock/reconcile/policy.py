"""Reconciliation policy: decide what a locked skill needs, then do it.

``decide`` compares one lock entry with what the scanner found:

=================================================  ==================
On disk                                            Decision
=================================================  ==================
not installed                                      install
installed, no sidecar metadata                     reinstall
metadata ref differs from the lock                 reinstall
lock has integrity, metadata integrity differs     reinstall
everything matches                                 satisfied
=================================================  ==================

``force`` turns any satisfied decision into a reinstall.

``Reconciler.install`` carries out a (re)install: remove the old copy, clone
the pinned commit, hand the skill directory to the external installer, hash
what it produced, refuse the result if it disagrees with a pinned
integrity, and finally record the new sidecar.
"""

from __future__ import annotations

import logging
from pathlib import Path

from skills_lock.constants import ROOT_SKILL_PATH
from skills_lock.core.lockfile import SkillEntry
from skills_lock.exceptions import IntegrityMismatchError, InstallerError
from skills_lock.integrity import compute_skill_hash, write_skill_metadata
from skills_lock.reconcile.installer import SkillInstaller
from skills_lock.reconcile.models import (
    Decision,
    DriftReason,
    InstalledSkill,
    InstallOutcome,
    SkillState,
)
from skills_lock.reconcile.scanner import SkillScanner
from skills_lock.resolver import pinned_checkout, skill_dir_in_checkout

logger = logging.getLogger(__name__)


def _drift(
    entry: SkillEntry,
    installed: InstalledSkill | None,
    live_integrity: str | None,
) -> DriftReason | None:
    if installed is None:
        return DriftReason.NOT_INSTALLED
    metadata = installed.metadata
    if metadata is None:
        return DriftReason.UNVERIFIED
    if metadata.ref != entry.ref:
        return DriftReason.WRONG_REF
    if entry.integrity is not None and metadata.integrity != entry.integrity:
        return DriftReason.MODIFIED
    if live_integrity is not None and live_integrity != metadata.integrity:
        return DriftReason.MODIFIED
    return None


def decide(
    name: str,
    entry: SkillEntry,
    installed: InstalledSkill | None,
    *,
    force: bool = False,
    live_integrity: str | None = None,
) -> Decision:
    """Classify one locked skill as satisfied or drifted.

    Args:
        name: Skill name.
        entry: Its lock entry.
        installed: What the scanner found under ``name``, if anything.
        force: Reinstall even when everything matches.
        live_integrity: A freshly computed hash of the installed files.
            When given, it must also equal the sidecar's integrity.
    """
    reason = _drift(entry, installed, live_integrity)
    if reason is None and force:
        reason = DriftReason.FORCED
    state = SkillState.SATISFIED if reason is None else SkillState.DRIFTED
    logger.debug("%s: %s%s", name, state.value, f" ({reason.value})" if reason else "")
    return Decision(name=name, entry=entry, installed=installed, state=state, reason=reason)


def satisfied_outcome(decision: Decision) -> InstallOutcome:
    """Report a skill that needed no work, with the integrity its sidecar records."""
    metadata = decision.installed.metadata if decision.installed else None
    return InstallOutcome(
        name=decision.name,
        state=SkillState.SATISFIED,
        ref=decision.entry.ref,
        integrity=metadata.integrity if metadata else decision.entry.integrity,
    )


class Reconciler:
    """Installs locked skills through an external installer and verifies them.

    Args:
        installer: The capability object that actually installs and removes
            skills (normally ``SkillsCli.detect()``).
        scanner: Used to find where the installer put each skill.
    """

    def __init__(self, installer: SkillInstaller, scanner: SkillScanner) -> None:
        self.installer = installer
        self.scanner = scanner

    def materialize(
        self,
        source: str,
        skill_name: str,
        ref: str | None = None,
        subpath: str | None = None,
    ) -> None:
        """Invoke the installer for one skill.

        With a ``ref``, the source is cloned at that exact commit into a
        temporary checkout that is removed afterwards whatever happens.
        Without one, ``source`` is passed through as-is (joined with
        ``subpath`` only when it is a local directory); the caller's
        directory is never deleted.
        """
        if ref:
            with pinned_checkout(source, ref) as checkout:
                target = skill_dir_in_checkout(checkout, subpath)
                self.installer.install(str(target), skill_name)
            return

        target = source
        if subpath and subpath != ROOT_SKILL_PATH and Path(source).is_dir():
            target = str(Path(source) / subpath)
        self.installer.install(target, skill_name)

    def install(
        self,
        name: str,
        entry: SkillEntry,
        existing: InstalledSkill | None = None,
    ) -> InstallOutcome:
        """(Re)install ``name`` exactly as ``entry`` pins it and verify the result.

        Args:
            name: Skill name.
            entry: Lock entry to materialise.
            existing: The currently installed copy, removed first if given.

        Returns:
            A ``VERIFIED`` outcome carrying the computed integrity.

        Raises:
            IntegrityMismatchError: If ``entry.integrity`` is set and the
                installed files hash to something else. No sidecar is
                written in that case.
            InstallerError: If the installer fails or leaves nothing behind.
            ResolutionError: If the source cannot be checked out at
                ``entry.ref`` or has no skill at ``entry.path``.
        """
        logger.info("Installing %s from %s at %s", name, entry.source, entry.ref[:7])
        if existing is not None:
            self.installer.remove(name)

        self.materialize(entry.source, name, entry.ref, entry.path)

        installed = self.scanner.find(name)
        if installed is None:
            raise InstallerError(
                f"Installer finished but '{name}' was not found in "
                f"{', '.join(self.scanner.skill_dirs)}"
            )

        integrity = compute_skill_hash(installed.disk_path)
        if entry.integrity is not None and integrity != entry.integrity:
            raise IntegrityMismatchError(name, entry.integrity, integrity)

        write_skill_metadata(installed.disk_path, entry.ref, integrity)
        return InstallOutcome(
            name=name,
            state=SkillState.VERIFIED,
            ref=entry.ref,
            integrity=integrity,
        )

    def reconcile(self, decision: Decision) -> InstallOutcome:
        """Drive one decision to a terminal state.

        Satisfied decisions are returned untouched. Drifted ones move through
        ``INSTALLING`` to ``VERIFIED``; on any error the decision is marked
        ``FAILED`` and the error propagates.
        """
        if not decision.needs_install:
            return satisfied_outcome(decision)

        reason = decision.reason
        decision.state = SkillState.INSTALLING
        try:
            outcome = self.install(decision.name, decision.entry, decision.installed)
        except BaseException:
            decision.state = SkillState.FAILED
            raise
        decision.state = SkillState.VERIFIED
        return InstallOutcome(
            name=outcome.name,
            state=outcome.state,
            ref=outcome.ref,
            integrity=outcome.integrity,
            reason=reason,
        )
