"""Shared fixtures for skills-lock tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from skills_lock.reconcile import SkillScanner
from tests.helpers import FakeInstaller, UpstreamRepo


@pytest.fixture
def git_available() -> None:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")


@pytest.fixture
def upstream(tmp_path: Path, git_available: None) -> UpstreamRepo:
    """An upstream repo with two nested skills, committed once."""
    repo = UpstreamRepo(tmp_path / "upstream")
    repo.add_skill("skills/pdf", "Read PDFs.\n")
    repo.write("skills/pdf/scripts/extract.py", "print('extract')\n")
    repo.add_skill("skills/docx", "Write documents.\n")
    repo.write("README.md", "# upstream\n")
    repo.commit("initial")
    return repo


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty project directory to install skills into."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def fake_installer(project_dir: Path) -> FakeInstaller:
    return FakeInstaller(project_dir)


@pytest.fixture
def scanner(project_dir: Path) -> SkillScanner:
    return SkillScanner(project_dir)
