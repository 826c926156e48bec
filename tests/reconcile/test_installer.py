"""Tests for the SkillsCli installer wrapper (subprocess calls mocked)."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from skills_lock.exceptions import InstallerError, InstallerUnavailableError
from skills_lock.reconcile import SkillInstaller, SkillsCli
from skills_lock.reconcile import installer as installer_module


class _Recorder:
    """Replacement for subprocess.run that records calls."""

    def __init__(self, returncode: int = 0, raises: type[Exception] | None = None) -> None:
        self.returncode = returncode
        self.raises = raises
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append((cmd, kwargs))
        if self.raises is not None:
            raise self.raises(cmd[0])
        return subprocess.CompletedProcess(cmd, self.returncode, "", "")


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> _Recorder:
    rec = _Recorder()
    monkeypatch.setattr(installer_module.subprocess, "run", rec)
    return rec


class TestSkillsCliCommands:
    def test_install_arguments(self, recorder: _Recorder, tmp_path: Path) -> None:
        SkillsCli(("npx", "skills"), cwd=tmp_path).install("/tmp/x/skills/pdf", "pdf")
        cmd, kwargs = recorder.calls[0]
        assert cmd == ["npx", "skills", "add", "/tmp/x/skills/pdf", "--skill", "pdf", "--yes"]
        assert kwargs["cwd"] == tmp_path
        assert "--global" not in cmd

    def test_remove_arguments(self, recorder: _Recorder) -> None:
        SkillsCli().remove("pdf")
        assert recorder.calls[0][0] == ["npx", "skills", "remove", "--skill", "pdf", "--yes"]

    def test_stdio_inherited(self, recorder: _Recorder) -> None:
        SkillsCli().install("src", "pdf")
        _, kwargs = recorder.calls[0]
        assert "capture_output" not in kwargs
        assert "stdout" not in kwargs

    def test_name_passed_unmodified(self, recorder: _Recorder) -> None:
        SkillsCli().install("src", "My Skill")
        assert recorder.calls[0][0][-2] == "My Skill"

    def test_nonzero_exit(self, recorder: _Recorder) -> None:
        recorder.returncode = 2
        with pytest.raises(InstallerError, match="'skills add' failed for 'pdf'"):
            SkillsCli().install("src", "pdf")

    def test_exit_127_is_unavailable(self, recorder: _Recorder) -> None:
        recorder.returncode = 127
        with pytest.raises(InstallerUnavailableError, match="npm install"):
            SkillsCli().remove("pdf")

    def test_missing_launcher(self, recorder: _Recorder) -> None:
        recorder.raises = FileNotFoundError
        with pytest.raises(InstallerUnavailableError, match="skills"):
            SkillsCli().install("src", "pdf")

    def test_is_a_skill_installer(self) -> None:
        assert isinstance(SkillsCli(), SkillInstaller)


class TestDetect:
    def test_probe_succeeds(self, recorder: _Recorder, tmp_path: Path) -> None:
        cli = SkillsCli.detect(("my-skills",), cwd=tmp_path)
        assert cli.command == ("my-skills",)
        assert cli.cwd == tmp_path
        assert recorder.calls[0][0] == ["my-skills", "--version"]

    def test_probe_failure(self, recorder: _Recorder) -> None:
        recorder.returncode = 1
        with pytest.raises(InstallerUnavailableError, match="npm install -g skills"):
            SkillsCli.detect()

    def test_launcher_not_found(self) -> None:
        with pytest.raises(InstallerUnavailableError, match="not available"):
            SkillsCli.detect(("skills-lock-no-such-command-xyz",))

    def test_unavailable_is_installer_error(self) -> None:
        assert issubclass(InstallerUnavailableError, InstallerError)
