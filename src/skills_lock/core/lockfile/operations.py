"""Lockfile operations: validation, reading, writing, and diffing.

These are attached to the ``Lockfile`` class at import time (in
``__init__.py``) and are also exported as plain functions.

Validation works on raw decoded JSON rather than on ``Lockfile`` objects, so
the same rules guard both what is read from disk and what is about to be
written to it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from skills_lock.constants import INTEGRITY_RE, LOCKFILE_VERSION, REF_RE
from skills_lock.core.loading import Loaded, Missing, load_json
from skills_lock.core.lockfile.models import Lockfile, LockfileDiff, SkillEntry
from skills_lock.exceptions import ParseError, ValidationError

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("source", "path", "ref")


def validate_lockfile(data: Any, subject: str = "Lockfile") -> None:
    """Check that decoded JSON conforms to the lockfile schema.

    Rules are checked in order and the first violation is raised:

    1. The document is a JSON object.
    2. ``version`` is exactly the integer ``1``.
    3. ``skills`` is a JSON object.
    4. Each skill is an object whose ``source``, ``path`` and ``ref`` are
       strings (checked in that order).
    5. Each ``ref`` is a full 40-character lowercase hex SHA.
    6. Each ``integrity``, when present, is ``sha256:<64 hex chars>``.

    Args:
        data: Decoded JSON value.
        subject: Noun used in document-level messages.

    Raises:
        ValidationError: Naming the offending field, skill, or value.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{subject} must be a JSON object")

    version = data.get("version")
    # JSON numbers 1 and 1.0 are the same version; `true` is not.
    if (
        isinstance(version, bool)
        or not isinstance(version, (int, float))
        or version != LOCKFILE_VERSION
    ):
        raise ValidationError(f"Unsupported lockfile version: {version!r}")

    skills = data.get("skills")
    if not isinstance(skills, dict):
        raise ValidationError(f"{subject} must have a 'skills' object")

    for name, entry in skills.items():
        if not isinstance(entry, dict):
            raise ValidationError(f"Skill '{name}' must be an object")

        for field_name in _REQUIRED_FIELDS:
            if not isinstance(entry.get(field_name), str):
                raise ValidationError(
                    f"Skill '{name}' missing or invalid field '{field_name}'"
                )

        ref = entry["ref"]
        if not REF_RE.match(ref):
            raise ValidationError(
                f"Skill '{name}' has invalid ref '{ref}': "
                "must be a full 40-character commit SHA"
            )

        integrity = entry.get("integrity")
        if integrity is not None and (
            not isinstance(integrity, str) or not INTEGRITY_RE.match(integrity)
        ):
            raise ValidationError(
                f"Skill '{name}' has invalid integrity {integrity!r}: "
                "must be 'sha256:' followed by 64 hex characters"
            )


def lockfile_from_dict(data: Any) -> Lockfile:
    """Validate decoded JSON and build a ``Lockfile`` from it."""
    validate_lockfile(data)
    skills = {
        name: SkillEntry(
            source=entry["source"],
            path=entry["path"],
            ref=entry["ref"],
            integrity=entry.get("integrity"),
        )
        for name, entry in data["skills"].items()
    }
    return Lockfile(version=LOCKFILE_VERSION, skills=skills)


def read_lockfile(path: Path) -> Lockfile | None:
    """Read and validate a lockfile from disk.

    Args:
        path: Location of the lockfile.

    Returns:
        The parsed ``Lockfile``, or None if no file exists at ``path``.

    Raises:
        ParseError: If the file exists but is not valid JSON.
        ValidationError: If the JSON violates the schema.
    """
    result = load_json(Path(path))
    if isinstance(result, Missing):
        logger.debug("No lockfile at %s", path)
        return None
    if isinstance(result, Loaded):
        return lockfile_from_dict(result.value)
    raise ParseError(f"Could not parse {path}: {result.reason}")


def write_lockfile(lockfile: Lockfile, path: Path) -> None:
    """Validate and write a lockfile in its canonical form.

    Skills are sorted by name, indented by two spaces, and followed by
    exactly one newline. The text goes to a temporary sibling first and is
    then renamed over ``path``, so an interrupted write never leaves a
    truncated lockfile behind.

    Raises:
        ValidationError: If ``lockfile`` is invalid; nothing is written.
    """
    validate_lockfile(lockfile.to_dict())
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(lockfile.to_json(), encoding="utf-8")
    os.replace(tmp_path, path)
    logger.debug("Wrote %d skill(s) to %s", len(lockfile.skills), path)


def diff_lockfiles(old: Lockfile, new: Lockfile) -> LockfileDiff:
    """Compare two lockfiles by skill name and ref.

    A skill whose ``source``, ``path`` or ``integrity`` differs but whose
    ``ref`` is unchanged is not reported. All three lists are sorted by
    name, matching the order ``write_lockfile`` uses.
    """
    old_names = set(old.skills)
    new_names = set(new.skills)
    return LockfileDiff(
        added=sorted(new_names - old_names),
        removed=sorted(old_names - new_names),
        changed=sorted(
            name
            for name in old_names & new_names
            if old.skills[name].ref != new.skills[name].ref
        ),
    )


def _from_dict(cls: type, data: Any) -> Lockfile:
    return lockfile_from_dict(data)


def _read(cls: type, path: Path) -> Lockfile | None:
    return read_lockfile(path)
