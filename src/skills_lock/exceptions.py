"""skills-lock exception hierarchy.

All public exceptions inherit from SkillsLockError, giving callers a single
base class to catch when they want to handle any skills-lock failure without
swallowing unrelated errors. The CLI converts these into ``Error: ...``
messages and exit code 1; library code only ever raises them.
"""

from __future__ import annotations


class SkillsLockError(Exception):
    """Base exception for all skills-lock errors."""


class ValidationError(SkillsLockError, ValueError):
    """Raised when lockfile data violates the schema.

    Covers a non-object document, an unsupported ``version``, a missing
    ``skills`` object, and per-skill field errors (missing fields,
    abbreviated or non-hex refs, malformed integrity strings). The message
    always names the offending skill, field, or value.
    """


class ParseError(SkillsLockError):
    """Raised when a lockfile exists but is not syntactically valid JSON."""


class NotFoundError(SkillsLockError):
    """Raised when required state does not exist.

    Covers a missing lockfile where one is required, a skill name that is
    not in the lockfile, and a checkout with zero commits. Callers may
    recover by initialising fresh state.
    """


class ResolutionError(SkillsLockError):
    """Raised when a source cannot be cloned, checked out, or searched.

    Covers git clone/checkout/rev-parse failures and requested skills or
    manifests that are not present in a repository. ``available`` lists the
    skills that *were* discovered, so the caller can suggest a valid name.
    """

    def __init__(self, message: str, available: list[str] | None = None) -> None:
        self.available = list(available or [])
        if self.available:
            message = f"{message}. Available: {', '.join(self.available)}"
        super().__init__(message)


class IntegrityMismatchError(SkillsLockError):
    """Raised when a freshly installed skill does not hash to its pinned value.

    Either upstream content changed under a pinned commit or the resolver or
    installer misbehaved. This is never downgraded to a warning.
    """

    def __init__(self, skill_name: str, expected: str, actual: str) -> None:
        self.skill_name = skill_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Integrity mismatch for '{skill_name}': expected {expected}, "
            f"got {actual}. Re-pin it with 'skills-lock update {skill_name}' "
            f"if the new content is trusted."
        )


class AlreadyLockedError(SkillsLockError):
    """Raised when adding a skill that the lockfile already pins."""


class InstallerError(SkillsLockError):
    """Raised when the external installer or remover reports failure."""


class InstallerUnavailableError(InstallerError):
    """Raised when the external ``skills`` CLI cannot be run at all."""


class SkillReadError(SkillsLockError):
    """Raised when an installed skill's files cannot be read for hashing."""
