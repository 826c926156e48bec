"""Deterministic directory traversal shared by manifest discovery and hashing.

Both callers need the same guarantees: entries at every level are visited in
ascending lexicographic order of their names, and an exclusion predicate can
prune a file or a whole subtree before it is read. Paths are reported
relative to the walk root with forward slashes, whatever the host OS uses.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

ExcludePredicate = Callable[[PurePosixPath, bool], bool]


@dataclass(frozen=True)
class TreeEntry:
    """One file or directory found by ``walk_tree``.

    Attributes:
        relative: Path relative to the walk root, slash-separated.
        path: Absolute path on disk.
        is_dir: True for directories, False for regular files.
    """

    relative: PurePosixPath
    path: Path
    is_dir: bool


def _exclude_nothing(relative: PurePosixPath, is_dir: bool) -> bool:
    return False


def exclude_names(names: frozenset[str] | set[str]) -> ExcludePredicate:
    """Build a predicate that prunes any entry whose own name is in ``names``."""

    def predicate(relative: PurePosixPath, is_dir: bool) -> bool:
        return relative.name in names

    return predicate


def exclude_paths(paths: frozenset[str] | set[str]) -> ExcludePredicate:
    """Build a predicate that prunes entries at exactly the given relative paths."""

    def predicate(relative: PurePosixPath, is_dir: bool) -> bool:
        return relative.as_posix() in paths

    return predicate


def walk_tree(
    root: Path,
    exclude: ExcludePredicate = _exclude_nothing,
) -> Iterator[TreeEntry]:
    """Yield every directory and regular file under ``root`` in sorted pre-order.

    The root itself is not yielded. Excluded directories are not descended
    into. Symlinks to files are followed; symlinks to directories are
    followed too, but never into a directory already on the current path,
    so link cycles terminate. Anything that is neither a regular file nor a
    directory (sockets, dangling links) is skipped.

    Args:
        root: Directory to walk.
        exclude: Called with ``(relative_path, is_dir)``; returning True
            drops the entry (and its subtree).
    """
    yield from _walk(Path(root), PurePosixPath(), exclude, {_identity(Path(root))})


def _identity(path: Path) -> tuple[int, int]:
    st = path.stat()
    return (st.st_dev, st.st_ino)


def _walk(
    directory: Path,
    prefix: PurePosixPath,
    exclude: ExcludePredicate,
    ancestors: set[tuple[int, int]],
) -> Iterator[TreeEntry]:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        relative = prefix / entry.name
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError:
            continue
        if not (is_dir or is_file):
            continue
        if exclude(relative, is_dir):
            continue

        yield TreeEntry(relative=relative, path=path, is_dir=is_dir)

        if is_dir:
            identity = _identity(path)
            if identity in ancestors:
                continue
            yield from _walk(path, relative, exclude, ancestors | {identity})


def iter_files(
    root: Path,
    exclude: ExcludePredicate = _exclude_nothing,
) -> Iterator[TreeEntry]:
    """Like ``walk_tree`` but yields regular files only."""
    return (entry for entry in walk_tree(root, exclude) if not entry.is_dir)
