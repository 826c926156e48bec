"""Deterministic content hashing of an installed skill directory.

The digest covers every regular file under the skill directory except the
sidecar metadata file at its root. Files are visited in sorted order at each
level, and each contributes its slash-separated relative path, a NUL byte,
then the 32-byte sha256 digest of its contents. Paths never contain NUL and
digests have a fixed length, so no two different trees produce the same
input stream. Renaming, adding, removing, moving or editing any file changes
the result; the sidecar's own contents never do. Empty directories
contribute nothing.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from skills_lock.constants import METADATA_FILENAME
from skills_lock.core.walk import exclude_paths, iter_files
from skills_lock.exceptions import SkillReadError

logger = logging.getLogger(__name__)

INTEGRITY_ALGORITHM = "sha256"

_CHUNK_SIZE = 1 << 16


def _file_digest(path: Path) -> bytes:
    file_hasher = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            file_hasher.update(chunk)
    return file_hasher.digest()


def compute_skill_hash(skill_dir: Path) -> str:
    """Compute the integrity string for ``skill_dir``.

    Args:
        skill_dir: Installed skill directory (a symlink to one is followed).

    Returns:
        ``"sha256:<64 hex chars>"``.

    Raises:
        NotADirectoryError: If ``skill_dir`` is not a directory.
        SkillReadError: If a directory or file under it cannot be read.
    """
    root = Path(skill_dir)
    if not root.is_dir():
        raise NotADirectoryError(f"Skill path is not a directory: {skill_dir}")

    hasher = hashlib.sha256()
    count = 0
    try:
        for entry in iter_files(root, exclude_paths(frozenset({METADATA_FILENAME}))):
            hasher.update(entry.relative.as_posix().encode("utf-8"))
            hasher.update(b"\0")
            hasher.update(_file_digest(entry.path))
            count += 1
    except OSError as exc:
        raise SkillReadError(f"Cannot read skill files in {root}: {exc}") from exc

    digest = f"{INTEGRITY_ALGORITHM}:{hasher.hexdigest()}"
    logger.debug("Hashed %d file(s) in %s: %s", count, root, digest)
    return digest
