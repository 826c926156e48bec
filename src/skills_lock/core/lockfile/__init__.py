"""The ``skills.lock`` lockfile: data model, validation, I/O, and diffing.

The package is split into focused submodules:

- ``models``: Data classes (``SkillEntry``, ``Lockfile``, ``LockfileDiff``).
- ``operations``: Validation, reading, canonical writing, and diffing.

The operations are attached to ``Lockfile`` here so that callers can write
either ``read_lockfile(path)`` or ``Lockfile.read(path)``.
"""

from skills_lock.core.lockfile.models import Lockfile, LockfileDiff, SkillEntry
from skills_lock.core.lockfile import operations as _ops
from skills_lock.core.lockfile.operations import (
    diff_lockfiles,
    lockfile_from_dict,
    read_lockfile,
    validate_lockfile,
    write_lockfile,
)

Lockfile.from_dict = classmethod(_ops._from_dict)
Lockfile.read = classmethod(_ops._read)
Lockfile.validate = staticmethod(_ops.validate_lockfile)
Lockfile.write = _ops.write_lockfile
Lockfile.diff = _ops.diff_lockfiles

__all__ = [
    "Lockfile",
    "LockfileDiff",
    "SkillEntry",
    "diff_lockfiles",
    "lockfile_from_dict",
    "read_lockfile",
    "validate_lockfile",
    "write_lockfile",
]
