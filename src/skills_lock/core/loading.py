"""Tagged results for reading JSON documents that may legitimately be absent.

The lockfile reader and the sidecar reader both need to tell "nothing is
there" apart from "something is there but unreadable". ``load_json`` returns
one of three small result types instead of raising, and each caller decides
which outcomes are errors.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union


@dataclass(frozen=True)
class Missing:
    """No file exists at ``path``."""

    path: Path


@dataclass(frozen=True)
class Malformed:
    """A file exists at ``path`` but could not be read or decoded."""

    path: Path
    reason: str


@dataclass(frozen=True)
class Loaded:
    """The file at ``path`` decoded to ``value``."""

    path: Path
    value: Any


LoadResult = Union[Missing, Malformed, Loaded]


def load_json(path: Path) -> LoadResult:
    """Read and decode a UTF-8 JSON file.

    Args:
        path: File to read.

    Returns:
        ``Missing`` if the file does not exist, ``Malformed`` if it is a
        directory, unreadable, not UTF-8, or not valid JSON, otherwise
        ``Loaded`` with the decoded value (of any JSON type).
    """
    if not path.exists():
        return Missing(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return Malformed(path, str(exc))
    try:
        return Loaded(path, json.loads(text))
    except json.JSONDecodeError as exc:
        return Malformed(path, f"invalid JSON: {exc}")
