"""``skills-lock diff <old> <new>`` — Show which skills two lockfiles disagree on."""

from __future__ import annotations

from pathlib import Path

import click

from skills_lock.cli.output import print_diff
from skills_lock.cli.support import reports_errors
from skills_lock.core.lockfile import Lockfile, diff_lockfiles, read_lockfile
from skills_lock.exceptions import NotFoundError


def _load(path: str) -> Lockfile:
    lockfile = read_lockfile(Path(path))
    if lockfile is None:
        raise NotFoundError(f"No lockfile at {path}")
    return lockfile


@click.command("diff")
@click.argument("old", type=click.Path(dir_okay=False))
@click.argument("new", type=click.Path(dir_okay=False))
@reports_errors
def diff_command(old: str, new: str) -> None:
    """List skills added, removed, or re-pinned between OLD and NEW."""
    print_diff(diff_lockfiles(_load(old), _load(new)))
