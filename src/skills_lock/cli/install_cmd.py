"""``skills-lock install`` — Make installed skills match skills.lock.

Every locked skill is checked against its sidecar metadata. Skills that are
missing, unverified, at the wrong ref, or modified are reinstalled from
their pinned commit and verified against the pinned integrity.

Exit Codes:
    0 — All skills verified or installed.
    1 — No lockfile, an install failed, or an integrity check failed.
"""

from __future__ import annotations

import click

from skills_lock.cli.output import console, print_decision
from skills_lock.cli.support import (
    installer_factory,
    make_scanner,
    reports_errors,
    require_lockfile,
)
from skills_lock.config import ProjectConfig
from skills_lock.reconcile import install_from_lockfile


@click.command("install")
@click.option("--force", is_flag=True, help="Reinstall every skill, even verified ones.")
@click.option(
    "--verify-content",
    is_flag=True,
    help="Also re-hash installed files and reinstall skills edited in place.",
)
@click.pass_obj
@reports_errors
def install_command(config: ProjectConfig, force: bool, verify_content: bool) -> None:
    """Install skills exactly as pinned in skills.lock."""
    lockfile = require_lockfile(config)
    if not lockfile.skills:
        console.print("No skills in lockfile.")
        return

    report = install_from_lockfile(
        lockfile,
        config.lockfile_path,
        make_scanner(config),
        installer_factory(config),
        force=force,
        verify_content=verify_content,
        on_decision=print_decision,
    )

    installed = report.installed
    if not installed:
        console.print("[green]All skills verified.[/green]")
    else:
        console.print(f"Installed {len(installed)} skill(s).")
