"""Tests for the git subprocess wrapper."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from skills_lock.exceptions import ResolutionError
from skills_lock.resolver import git as git_module
from skills_lock.resolver.git import run_git


class TestRunGit:
    def test_missing_git_binary(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(git_module, "GIT", "definitely-not-git-xyz")
        with pytest.raises(ResolutionError, match="git is not installed"):
            run_git(["--version"])

    def test_failure_carries_stderr(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 128, "", "fatal: repository not found\n")

        monkeypatch.setattr(git_module.subprocess, "run", fake_run)
        with pytest.raises(ResolutionError, match="git clone failed: fatal: repository not found"):
            run_git(["clone", "x", "y"])

    def test_check_false_returns_result(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 1, "", "")

        monkeypatch.setattr(git_module.subprocess, "run", fake_run)
        assert run_git(["rev-parse"], check=False).returncode == 1

    def test_runs_in_cwd(self, tmp_path: Path, git_available: None) -> None:
        run_git(["init", "--quiet"], cwd=tmp_path)
        assert (tmp_path / ".git").is_dir()
