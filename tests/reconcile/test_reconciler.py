"""Tests for Reconciler: materialising, verifying, and state transitions."""

from __future__ import annotations

from pathlib import Path

import pytest

from skills_lock.core.lockfile import SkillEntry
from skills_lock.exceptions import IntegrityMismatchError, InstallerError, ResolutionError
from skills_lock.integrity import compute_skill_hash, read_skill_metadata
from skills_lock.reconcile import (
    DriftReason,
    Reconciler,
    SkillInstaller,
    SkillScanner,
    SkillState,
    decide,
)
from tests.helpers import INTEGRITY_A, FakeInstaller, UpstreamRepo


class _NoopInstaller(SkillInstaller):
    def install(self, source: str, skill_name: str) -> None:
        pass

    def remove(self, skill_name: str) -> None:
        pass


def _entry(upstream: UpstreamRepo, integrity: str | None = None) -> SkillEntry:
    return SkillEntry(upstream.url, "skills/pdf", upstream.head, integrity)


class TestMaterialize:
    def test_pinned_ref_uses_temporary_checkout(
        self, upstream: UpstreamRepo, fake_installer: FakeInstaller, scanner: SkillScanner
    ) -> None:
        Reconciler(fake_installer, scanner).materialize(
            upstream.url, "pdf", upstream.head, "skills/pdf"
        )
        _, source, name = fake_installer.calls[0]
        assert name == "pdf"
        assert source.endswith("skills/pdf")
        assert not Path(source).exists()
        assert (fake_installer.target("pdf") / "scripts" / "extract.py").is_file()

    def test_local_dir_without_ref(
        self, upstream: UpstreamRepo, fake_installer: FakeInstaller, scanner: SkillScanner
    ) -> None:
        Reconciler(fake_installer, scanner).materialize(upstream.url, "pdf", None, "skills/pdf")
        assert fake_installer.calls[0][1] == str(upstream.path / "skills/pdf")
        assert upstream.path.exists()

    def test_remote_source_without_ref_passed_through(
        self, fake_installer: FakeInstaller, scanner: SkillScanner, monkeypatch
    ) -> None:
        calls: list[tuple[str, str]] = []
        monkeypatch.setattr(fake_installer, "install", lambda s, n: calls.append((s, n)))
        Reconciler(fake_installer, scanner).materialize(
            "https://github.com/o/r.git", "pdf", None, "skills/pdf"
        )
        assert calls == [("https://github.com/o/r.git", "pdf")]

    def test_unknown_path_lists_available(
        self, upstream: UpstreamRepo, fake_installer: FakeInstaller, scanner: SkillScanner
    ) -> None:
        with pytest.raises(ResolutionError, match="Available: skills/docx, skills/pdf"):
            Reconciler(fake_installer, scanner).materialize(
                upstream.url, "gone", upstream.head, "skills/gone"
            )
        assert fake_installer.calls == []


class TestInstall:
    def test_verified_with_sidecar(
        self, upstream: UpstreamRepo, fake_installer: FakeInstaller, scanner: SkillScanner
    ) -> None:
        outcome = Reconciler(fake_installer, scanner).install("pdf", _entry(upstream))
        target = fake_installer.target("pdf")
        assert outcome.state is SkillState.VERIFIED
        assert outcome.integrity == compute_skill_hash(upstream.path / "skills/pdf")
        metadata = read_skill_metadata(target)
        assert metadata is not None
        assert metadata.ref == upstream.head
        assert metadata.integrity == outcome.integrity

    def test_existing_copy_removed_first(
        self, upstream: UpstreamRepo, fake_installer: FakeInstaller, scanner: SkillScanner
    ) -> None:
        reconciler = Reconciler(fake_installer, scanner)
        reconciler.install("pdf", _entry(upstream))
        reconciler.install("pdf", _entry(upstream), scanner.find("pdf"))
        assert [c[0] for c in fake_installer.calls] == ["install", "remove", "install"]

    def test_integrity_mismatch_refused(
        self, upstream: UpstreamRepo, fake_installer: FakeInstaller, scanner: SkillScanner
    ) -> None:
        with pytest.raises(IntegrityMismatchError, match="Integrity mismatch for 'pdf'") as exc:
            Reconciler(fake_installer, scanner).install("pdf", _entry(upstream, INTEGRITY_A))
        assert exc.value.expected == INTEGRITY_A
        assert read_skill_metadata(fake_installer.target("pdf")) is None

    def test_matching_integrity_accepted(
        self, upstream: UpstreamRepo, fake_installer: FakeInstaller, scanner: SkillScanner
    ) -> None:
        pinned = compute_skill_hash(upstream.path / "skills/pdf")
        outcome = Reconciler(fake_installer, scanner).install("pdf", _entry(upstream, pinned))
        assert outcome.integrity == pinned

    def test_installer_left_nothing(self, upstream: UpstreamRepo, scanner: SkillScanner) -> None:
        with pytest.raises(InstallerError, match="was not found"):
            Reconciler(_NoopInstaller(), scanner).install("pdf", _entry(upstream))


class TestReconcile:
    def test_satisfied_untouched(
        self, upstream: UpstreamRepo, fake_installer: FakeInstaller, scanner: SkillScanner
    ) -> None:
        reconciler = Reconciler(fake_installer, scanner)
        reconciler.install("pdf", _entry(upstream))
        fake_installer.calls.clear()
        decision = decide("pdf", _entry(upstream), scanner.find("pdf"))
        outcome = reconciler.reconcile(decision)
        assert outcome.state is SkillState.SATISFIED
        assert fake_installer.calls == []

    def test_drifted_becomes_verified(
        self, upstream: UpstreamRepo, fake_installer: FakeInstaller, scanner: SkillScanner
    ) -> None:
        decision = decide("pdf", _entry(upstream), None)
        outcome = Reconciler(fake_installer, scanner).reconcile(decision)
        assert decision.state is SkillState.VERIFIED
        assert outcome.reason is DriftReason.NOT_INSTALLED

    def test_failure_marks_failed_and_propagates(
        self, upstream: UpstreamRepo, scanner: SkillScanner
    ) -> None:
        decision = decide("pdf", _entry(upstream), None)
        with pytest.raises(InstallerError):
            Reconciler(_NoopInstaller(), scanner).reconcile(decision)
        assert decision.state is SkillState.FAILED
