"""Integrity of installed skills: content hashing and sidecar metadata."""

from __future__ import annotations

from skills_lock.integrity.hashing import INTEGRITY_ALGORITHM, compute_skill_hash
from skills_lock.integrity.metadata import (
    SkillMetadata,
    metadata_path,
    read_skill_metadata,
    write_skill_metadata,
)

__all__ = [
    "INTEGRITY_ALGORITHM",
    "SkillMetadata",
    "compute_skill_hash",
    "metadata_path",
    "read_skill_metadata",
    "write_skill_metadata",
]
