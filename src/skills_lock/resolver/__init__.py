"""Source resolution: URL normalisation, git checkouts, and skill discovery.

Public API::

    from skills_lock.resolver import expand_source, shallow_checkout, find_skills

    with shallow_checkout("anthropics/skills") as checkout:
        for skill in find_skills(checkout, expand_source("anthropics/skills")):
            print(skill.name, skill.path, skill.ref)
"""

from __future__ import annotations

from skills_lock.resolver.models import ResolvedSkill, ResolveOptions
from skills_lock.resolver.resolver import (
    cleanup_clone,
    clone_at_ref,
    find_skill_paths,
    find_skills,
    pinned_checkout,
    resolve_ref,
    resolve_repo,
    shallow_checkout,
    skill_dir_in_checkout,
)
from skills_lock.resolver.source import expand_source

__all__ = [
    "ResolvedSkill",
    "ResolveOptions",
    "cleanup_clone",
    "clone_at_ref",
    "expand_source",
    "find_skill_paths",
    "find_skills",
    "pinned_checkout",
    "resolve_ref",
    "resolve_repo",
    "shallow_checkout",
    "skill_dir_in_checkout",
]
