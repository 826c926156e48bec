"""Plumbing shared by the CLI commands: logging, errors, and loading state."""

from __future__ import annotations

import functools
import logging
import sys
from collections.abc import Callable
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler

from skills_lock.config import ProjectConfig
from skills_lock.core.lockfile import Lockfile, read_lockfile
from skills_lock.exceptions import NotFoundError, SkillsLockError
from skills_lock.reconcile import SkillsCli, SkillScanner


def configure_logging(verbose: bool) -> None:
    """Send ``skills_lock`` log records to stderr through Rich."""
    logger = logging.getLogger("skills_lock")
    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def reports_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn any ``SkillsLockError`` into ``Error: ...`` on stderr and exit 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SkillsLockError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)

    return wrapper


def require_lockfile(config: ProjectConfig) -> Lockfile:
    """Read the project's lockfile, failing with a hint if there is none."""
    lockfile = read_lockfile(config.lockfile_path)
    if lockfile is None:
        raise NotFoundError(
            f"No {config.lockfile_path.name} found. Run 'skills-lock add' to start."
        )
    return lockfile


def make_scanner(config: ProjectConfig) -> SkillScanner:
    return SkillScanner(config.project_dir, config.skill_dirs)


def detect_installer(config: ProjectConfig) -> SkillsCli:
    """Check once that the ``skills`` CLI can run and return it."""
    return SkillsCli.detect(config.installer_command, cwd=config.project_dir)


def installer_factory(config: ProjectConfig) -> Callable[[], SkillsCli]:
    return functools.partial(detect_installer, config)
