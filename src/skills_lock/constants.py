"""File names, directory names, and defaults shared across skills-lock."""

from __future__ import annotations

import re

# Lockfile written at the project root.
LOCKFILE_NAME = "skills.lock"
LOCKFILE_VERSION = 1

# Marker file whose presence makes a directory a skill.
MANIFEST_FILENAME = "SKILL.md"

# Per-skill sidecar recording what was actually installed.
METADATA_FILENAME = ".skills-lock"

# Scanned in order; the first directory holding a given name wins.
SKILL_DIRS: tuple[str, ...] = (".agents/skills", ".claude/skills")

# Never descended into while searching a checkout for manifests.
CHECKOUT_EXCLUDED_DIRS: frozenset[str] = frozenset({".git", "node_modules"})

CLONE_PREFIX = "skills-lock-"

DEFAULT_INSTALLER_COMMAND = "npx skills"

PRIMARY_HOST = "github.com"
SECONDARY_HOST = "gitlab.com"

# Sentinel name/path for a manifest at the checkout root.
ROOT_SKILL_PATH = "."

REF_RE = re.compile(r"^[0-9a-f]{40}$")
INTEGRITY_RE = re.compile(r"^sha256:[0-9a-f]{64}$")

# Environment variables backing the CLI options.
ENV_PROJECT_DIR = "SKILLS_LOCK_PROJECT_DIR"
ENV_LOCKFILE = "SKILLS_LOCK_FILE"
ENV_INSTALLER = "SKILLS_LOCK_INSTALLER"
