"""Rich output formatting helpers for the skills-lock CLI.

Progress lines, check reports, and lockfile diffs all go through one
``Console`` so styling stays consistent. Skill names come from untrusted
lockfiles and repositories, so they are escaped before being printed as
markup.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skills_lock.core.lockfile import LockfileDiff
from skills_lock.reconcile import CheckReport, Decision

console = Console(soft_wrap=True)


def print_decision(decision: Decision) -> None:
    """Print one line per locked skill as an install pass reaches it."""
    name = escape(decision.name)
    if decision.needs_install and decision.reason is not None:
        source = escape(decision.entry.source)
        console.print(
            f"  [bold]{name}[/bold]: {decision.reason.value}, "
            f"installing from {source} @ {decision.entry.ref[:7]}..."
        )
    else:
        console.print(f"  [bold]{name}[/bold]: [green]verified[/green]")


def print_update_check(name: str, old_ref: str, new_ref: str) -> None:
    if old_ref == new_ref:
        console.print(f"  [bold]{escape(name)}[/bold]: already up to date")
    else:
        console.print(
            f"  [bold]{escape(name)}[/bold]: {old_ref[:7]} -> [cyan]{new_ref[:7]}[/cyan]"
        )


_CHECK_SECTIONS = (
    ("missing", "Missing (in lockfile but not installed)", "red"),
    ("extra", "Extra (installed but not in lockfile)", "yellow"),
    ("wrong_ref", "Wrong ref (installed from a different commit)", "red"),
    ("modified", "Modified (files changed since install)", "red"),
    ("unverified", "Unverified (no skills-lock metadata)", "yellow"),
)


def print_check_report(report: CheckReport) -> None:
    """Print every non-empty section of a check report."""
    if report.in_sync:
        console.print("[green]All skills verified.[/green]")
        return
    for attr, title, style in _CHECK_SECTIONS:
        names = getattr(report, attr)
        if not names:
            continue
        console.print(f"[{style}]{title}:[/{style}]")
        for name in names:
            console.print(f"  - {escape(name)}")


def print_diff(diff: LockfileDiff) -> None:
    """Print a lockfile diff as a table."""
    if diff.is_empty:
        console.print("[dim]No differences.[/dim]")
        return

    table = Table(title="Lockfile Diff", show_header=True, header_style="bold")
    table.add_column("Skill", style="bold")
    table.add_column("Change", justify="center")
    for name in diff.added:
        table.add_row(escape(name), "[green]added[/green]")
    for name in diff.removed:
        table.add_row(escape(name), "[red]removed[/red]")
    for name in diff.changed:
        table.add_row(escape(name), "[cyan]changed[/cyan]")
    console.print(table)
    console.print(
        f"{len(diff.added)} added | {len(diff.removed)} removed | {len(diff.changed)} changed"
    )
