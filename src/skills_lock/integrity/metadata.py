"""Per-skill sidecar metadata: what was actually installed, and when pinned.

The sidecar is a tiny JSON file at the root of every skill skills-lock
installs, recording the commit and content hash of that install. It is the
record of what is on disk, independent of what the lockfile currently asks
for. Reading it is best-effort: a missing or unusable sidecar means
"provenance unknown", never an error.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from skills_lock.constants import METADATA_FILENAME
from skills_lock.core.loading import Loaded, Malformed, load_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillMetadata:
    """Contents of a skill's sidecar file.

    Attributes:
        ref: Commit SHA the skill was installed from.
        integrity: ``sha256:<hex>`` hash computed right after that install.
    """

    ref: str
    integrity: str

    def to_dict(self) -> dict[str, str]:
        return {"ref": self.ref, "integrity": self.integrity}


def metadata_path(skill_dir: Path) -> Path:
    return Path(skill_dir) / METADATA_FILENAME


def write_skill_metadata(skill_dir: Path, ref: str, integrity: str) -> None:
    """Create or overwrite the sidecar inside ``skill_dir``."""
    path = metadata_path(skill_dir)
    payload = SkillMetadata(ref=ref, integrity=integrity).to_dict()
    path.write_text(json.dumps(payload) + "\n", encoding="utf-8")
    logger.debug("Wrote metadata for %s (ref %s)", skill_dir, ref[:7])


def read_skill_metadata(skill_dir: Path) -> SkillMetadata | None:
    """Read the sidecar inside ``skill_dir``.

    Returns:
        The metadata, or None when the sidecar is absent, unparsable, not an
        object, or lacks a string ``ref`` or ``integrity``.
    """
    result = load_json(metadata_path(skill_dir))
    if isinstance(result, Malformed):
        logger.debug("Ignoring unreadable metadata at %s: %s", result.path, result.reason)
        return None
    if not isinstance(result, Loaded) or not isinstance(result.value, dict):
        return None

    ref = result.value.get("ref")
    integrity = result.value.get("integrity")
    if not isinstance(ref, str) or not isinstance(integrity, str):
        logger.debug("Ignoring incomplete metadata at %s", result.path)
        return None
    return SkillMetadata(ref=ref, integrity=integrity)
