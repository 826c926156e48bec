"""``skills-lock check`` — Compare installed skills against skills.lock.

Read-only. Reports skills that are missing, extra, installed from the wrong
commit, modified since install, or installed without skills-lock metadata.

Exit Codes:
    0 — Everything matches.
    1 — Anything is out of sync, or there is no lockfile.
"""

from __future__ import annotations

import sys

import click

from skills_lock.cli.output import print_check_report
from skills_lock.cli.support import make_scanner, reports_errors, require_lockfile
from skills_lock.config import ProjectConfig
from skills_lock.reconcile import check_skills


@click.command("check")
@click.option(
    "--verify-content",
    is_flag=True,
    help="Re-hash installed files instead of trusting their metadata.",
)
@click.pass_obj
@reports_errors
def check_command(config: ProjectConfig, verify_content: bool) -> None:
    """Verify that installed skills match skills.lock."""
    lockfile = require_lockfile(config)
    report = check_skills(
        lockfile, make_scanner(config).scan(), verify_content=verify_content
    )
    print_check_report(report)
    sys.exit(0 if report.in_sync else 1)
