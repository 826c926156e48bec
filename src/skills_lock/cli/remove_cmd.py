"""``skills-lock remove <name>`` — Uninstall a skill and unpin it."""

from __future__ import annotations

import click
from rich.markup import escape

from skills_lock.cli.output import console
from skills_lock.cli.support import detect_installer, reports_errors
from skills_lock.config import ProjectConfig
from skills_lock.core.lockfile import read_lockfile
from skills_lock.reconcile import remove_skill


@click.command("remove")
@click.argument("skill_name")
@click.pass_obj
@reports_errors
def remove_command(config: ProjectConfig, skill_name: str) -> None:
    """Remove SKILL_NAME from disk and from skills.lock."""
    installer = detect_installer(config)
    lockfile = read_lockfile(config.lockfile_path)
    remove_skill(skill_name, lockfile, config.lockfile_path, installer)
    console.print(f"Removed {escape(skill_name)}")
