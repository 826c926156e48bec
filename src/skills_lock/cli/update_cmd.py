"""``skills-lock update [name]`` — Re-pin skills to the latest upstream commit.

The lockfile is saved after each skill that moves, so an interrupted run
keeps the updates it already finished.
"""

from __future__ import annotations

import click

from skills_lock.cli.output import console, print_update_check
from skills_lock.cli.support import (
    installer_factory,
    make_scanner,
    reports_errors,
    require_lockfile,
)
from skills_lock.config import ProjectConfig
from skills_lock.reconcile import update_skills


@click.command("update")
@click.argument("skill_name", required=False)
@click.pass_obj
@reports_errors
def update_command(config: ProjectConfig, skill_name: str | None) -> None:
    """Update SKILL_NAME (or every locked skill) to its source's latest commit."""
    lockfile = require_lockfile(config)
    if not lockfile.skills:
        console.print("No skills to update.")
        return

    diff = update_skills(
        lockfile,
        config.lockfile_path,
        make_scanner(config),
        installer_factory(config),
        [skill_name] if skill_name else None,
        on_checked=print_update_check,
    )
    if diff.changed:
        console.print(f"Updated {len(diff.changed)} skill(s).")
    else:
        console.print("Everything up to date.")
