"""``skills-lock add <source> --skill <name>`` — Install a skill and pin it.

Clones the source, finds the named skill, installs it at the exact commit
found, hashes the result, and records source, path, ref and integrity in
skills.lock.
"""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from skills_lock.cli.output import console
from skills_lock.cli.support import detect_installer, make_scanner, reports_errors
from skills_lock.config import ProjectConfig
from skills_lock.core.lockfile import read_lockfile
from skills_lock.reconcile import add_skill


@click.command("add")
@click.argument("source")
@click.option("--skill", "skill_name", default=None, help="Skill name within the source repo.")
@click.option("--ref", "branch", default=None, help="Branch to resolve instead of the default.")
@click.option("--force", is_flag=True, help="Re-pin a skill that is already locked.")
@click.pass_obj
@reports_errors
def add_command(
    config: ProjectConfig,
    source: str,
    skill_name: str | None,
    branch: str | None,
    force: bool,
) -> None:
    """Install a skill from SOURCE and add it to skills.lock."""
    if not skill_name:
        click.echo("Please specify a skill name with --skill <name>", err=True)
        sys.exit(1)

    lock_name = config.lockfile_path.name
    lockfile = read_lockfile(config.lockfile_path)
    if lockfile is not None and skill_name in lockfile.skills and not force:
        console.print(
            f"{escape(skill_name)} is already in {lock_name}. "
            "Use --force to re-resolve and re-pin it."
        )
        return

    console.print(f"Installing {escape(skill_name)} from {escape(source)}...")
    entry = add_skill(
        lockfile,
        config.lockfile_path,
        source,
        skill_name,
        make_scanner(config),
        detect_installer(config),
        branch=branch,
        force=force,
    )
    console.print(f"Added {escape(skill_name)} to {lock_name} (ref: {entry.ref[:7]})")
