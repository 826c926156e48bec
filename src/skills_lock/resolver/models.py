"""Data models produced and consumed by the resolver."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedSkill:
    """A skill discovered inside a checkout.

    Attributes:
        name: Last segment of ``path``, or ``"."`` for a root-level skill.
        source: Source identifier the checkout was made from.
        path: Slash-separated directory of the manifest, relative to the
            checkout root (``"."`` for the root itself).
        ref: HEAD commit of the checkout.
    """

    name: str
    source: str
    path: str
    ref: str


@dataclass(frozen=True)
class ResolveOptions:
    """Options for ``resolve_repo``.

    Attributes:
        ref: Branch (or tag) to request from the remote; None for the
            remote's default branch.
    """

    ref: str | None = None
