"""skills-lock CLI — Pin, share, and reproduce agent skill installations.

Entry point for the ``skills-lock`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    install — Install skills exactly as pinned in skills.lock.
    add     — Install a skill from a repo and pin it.
    remove  — Uninstall a skill and unpin it.
    update  — Re-pin skills to the latest upstream commit.
    check   — Verify installed skills against skills.lock.
    diff    — Compare two lockfiles.

Usage::

    skills-lock add anthropics/skills --skill pdf
    skills-lock install
    skills-lock check --verify-content
    skills-lock update pdf
"""

from __future__ import annotations

import click

from skills_lock import __version__
from skills_lock.cli.add_cmd import add_command
from skills_lock.cli.check_cmd import check_command
from skills_lock.cli.diff_cmd import diff_command
from skills_lock.cli.install_cmd import install_command
from skills_lock.cli.remove_cmd import remove_command
from skills_lock.cli.support import configure_logging
from skills_lock.cli.update_cmd import update_command
from skills_lock.config import ProjectConfig
from skills_lock.constants import ENV_INSTALLER, ENV_LOCKFILE, ENV_PROJECT_DIR


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False),
    envvar=ENV_PROJECT_DIR,
    default=None,
    help="Project root (default: current directory).",
)
@click.option(
    "--lockfile",
    type=click.Path(dir_okay=False),
    envvar=ENV_LOCKFILE,
    default=None,
    help="Lockfile path, relative to the project root (default: skills.lock).",
)
@click.option(
    "--installer",
    "installer_command",
    envvar=ENV_INSTALLER,
    default=None,
    help="Command that runs the skills CLI (default: 'npx skills').",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging on stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    project_dir: str | None,
    lockfile: str | None,
    installer_command: str | None,
    verbose: bool,
) -> None:
    """skills-lock: A lockfile for AI agent skills.

    Pin every skill to an exact commit and content hash, then reproduce
    the same installation anywhere.
    """
    configure_logging(verbose)
    ctx.obj = ProjectConfig.build(project_dir, lockfile, installer_command)


# Register all subcommands
cli.add_command(install_command)
cli.add_command(add_command)
cli.add_command(remove_command)
cli.add_command(update_command)
cli.add_command(check_command)
cli.add_command(diff_command)
