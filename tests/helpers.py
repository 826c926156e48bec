"""Test helpers: a local upstream git repository and a fake installer.

``UpstreamRepo`` plays the part of a remote skill source; tests clone it by
its filesystem path. ``FakeInstaller`` stands in for the external ``skills``
CLI by copying directories into ``<project>/.agents/skills/<name>``.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from skills_lock.reconcile import SkillInstaller

REF_A = "a" * 40
REF_B = "b" * 40
REF_C = "0123456789abcdef0123456789abcdef01234567"
INTEGRITY_A = "sha256:" + "1" * 64
INTEGRITY_B = "sha256:" + "2" * 64

_GIT_IDENTITY = {
    "GIT_AUTHOR_NAME": "skills-lock tests",
    "GIT_AUTHOR_EMAIL": "tests@example.com",
    "GIT_COMMITTER_NAME": "skills-lock tests",
    "GIT_COMMITTER_EMAIL": "tests@example.com",
}


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=cwd,
        env={**os.environ, **_GIT_IDENTITY},
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


class UpstreamRepo:
    """A local git repository standing in for a remote skill source."""

    def __init__(self, path: Path) -> None:
        self.path = path
        path.mkdir(parents=True)
        git(path, "init", "--quiet")
        git(path, "symbolic-ref", "HEAD", "refs/heads/main")

    @property
    def url(self) -> str:
        return str(self.path)

    @property
    def head(self) -> str:
        return git(self.path, "rev-parse", "HEAD")

    def write(self, relative: str, content: str) -> Path:
        target = self.path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target

    def add_skill(self, relative: str, body: str = "Does things.\n") -> Path:
        """Create ``<relative>/SKILL.md`` with some front matter."""
        name = Path(relative).name if relative != "." else "root"
        return self.write(
            f"{relative}/SKILL.md", f"---\nname: {name}\n---\n\n{body}"
        ).parent

    def remove(self, relative: str) -> None:
        target = self.path / relative
        if target.is_dir():
            shutil.rmtree(target)
        else:
            target.unlink()

    def commit(self, message: str = "update") -> str:
        git(self.path, "add", "-A")
        git(self.path, "commit", "--quiet", "--allow-empty", "-m", message)
        return self.head

    def branch(self, name: str) -> None:
        git(self.path, "checkout", "--quiet", "-b", name)

    def checkout(self, name: str) -> None:
        git(self.path, "checkout", "--quiet", name)


class FakeInstaller(SkillInstaller):
    """Copies skill directories into ``<project>/.agents/skills/<name>``.

    Every call is recorded so tests can assert on what was installed and
    removed, and in which order. ``tamper`` maps a skill name to text that
    replaces its ``SKILL.md`` right after copying.
    """

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = project_dir
        self.calls: list[tuple[str, ...]] = []
        self.tamper: dict[str, str] = {}

    def target(self, skill_name: str) -> Path:
        return self.project_dir / ".agents" / "skills" / skill_name

    def install(self, source: str, skill_name: str) -> None:
        self.calls.append(("install", source, skill_name))
        target = self.target(skill_name)
        if target.exists():
            shutil.rmtree(target)
        shutil.copytree(source, target, ignore=shutil.ignore_patterns(".git"))
        if skill_name in self.tamper:
            (target / "SKILL.md").write_text(self.tamper[skill_name])

    def remove(self, skill_name: str) -> None:
        self.calls.append(("remove", skill_name))
        target = self.target(skill_name)
        if target.exists():
            shutil.rmtree(target)

    @property
    def installed_names(self) -> list[str]:
        return [call[2] for call in self.calls if call[0] == "install"]


def make_tree(root: Path, files: dict[str, str]) -> Path:
    """Create a directory tree from a ``{relative path: content}`` mapping."""
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return root
