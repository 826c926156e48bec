"""Git-backed source resolution: clones, refs, and manifest discovery.

Two kinds of checkout are made:

- ``resolve_repo``: a shallow, depth-one clone. Enough to learn the tip of a
  branch and see which skills it contains.
- ``clone_at_ref``: a full clone followed by a detached checkout of an exact
  commit. Shallow clones cannot reliably reach a commit that is no longer a
  branch tip, so every pinned install uses this.

Both create a fresh temporary directory and remove it themselves if the clone
fails. On success the caller owns the directory; ``shallow_checkout`` and
``pinned_checkout`` wrap the pair in a context manager that always cleans up.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from skills_lock.constants import (
    CHECKOUT_EXCLUDED_DIRS,
    CLONE_PREFIX,
    MANIFEST_FILENAME,
    ROOT_SKILL_PATH,
)
from skills_lock.core.walk import exclude_names, iter_files
from skills_lock.exceptions import NotFoundError, ResolutionError
from skills_lock.resolver.git import run_git
from skills_lock.resolver.models import ResolvedSkill, ResolveOptions
from skills_lock.resolver.source import expand_source

logger = logging.getLogger(__name__)


def _make_clone_dir() -> Path:
    return Path(tempfile.mkdtemp(prefix=CLONE_PREFIX))


def cleanup_clone(path: Path) -> None:
    """Recursively remove a checkout directory. A missing path is a no-op."""
    path = Path(path)
    if not path.exists() and not path.is_symlink():
        return
    shutil.rmtree(path)
    logger.debug("Removed checkout %s", path)


def _clone(args: list[str], url: str) -> Path:
    target = _make_clone_dir()
    try:
        run_git(["clone", "--quiet", *args, url, str(target)])
    except BaseException:
        cleanup_clone(target)
        raise
    logger.debug("Cloned %s into %s", url, target)
    return target


def resolve_repo(source: str, options: ResolveOptions | None = None) -> Path:
    """Shallow-clone ``source`` into a new temporary directory.

    Args:
        source: Any form accepted by ``expand_source``.
        options: ``options.ref`` names a branch to fetch instead of the
            remote default.

    Returns:
        Path of the checkout. The caller must ``cleanup_clone`` it.

    Raises:
        ResolutionError: If the clone fails.
    """
    args = ["--depth", "1"]
    if options is not None and options.ref:
        args += ["--branch", options.ref]
    return _clone(args, expand_source(source))


def clone_at_ref(source: str, ref: str) -> Path:
    """Fully clone ``source`` and check out the exact commit ``ref``.

    Raises:
        ResolutionError: If the clone fails or ``ref`` is not reachable.
    """
    checkout = _clone([], expand_source(source))
    try:
        run_git(["checkout", "--quiet", "--detach", ref], cwd=checkout)
    except BaseException:
        cleanup_clone(checkout)
        raise
    return checkout


@contextmanager
def shallow_checkout(source: str, options: ResolveOptions | None = None) -> Iterator[Path]:
    """Context manager around ``resolve_repo`` that always removes the clone."""
    checkout = resolve_repo(source, options)
    try:
        yield checkout
    finally:
        cleanup_clone(checkout)


@contextmanager
def pinned_checkout(source: str, ref: str) -> Iterator[Path]:
    """Context manager around ``clone_at_ref`` that always removes the clone."""
    checkout = clone_at_ref(source, ref)
    try:
        yield checkout
    finally:
        cleanup_clone(checkout)


def resolve_ref(checkout: Path) -> str:
    """Return the full SHA of HEAD in ``checkout``.

    Raises:
        NotFoundError: If the repository has no commits yet.
        ResolutionError: If ``checkout`` is not a git repository.
    """
    result = run_git(["rev-parse", "--verify", "--quiet", "HEAD"], cwd=Path(checkout), check=False)
    if result.returncode == 0:
        return result.stdout.strip()
    # --verify --quiet exits 1 silently when HEAD is unborn.
    if result.returncode == 1 and not result.stderr.strip():
        raise NotFoundError(f"No commits found in {checkout}")
    raise ResolutionError(
        f"Could not resolve HEAD in {checkout}: {result.stderr.strip()}"
    )


def find_skill_paths(checkout: Path) -> list[str]:
    """Return the slash-separated directory of every manifest under ``checkout``.

    The whole tree is searched, so nested skills and a root-level skill are
    all reported. ``.git`` and ``node_modules`` are never entered.
    """
    paths: list[str] = []
    for entry in iter_files(Path(checkout), exclude_names(CHECKOUT_EXCLUDED_DIRS)):
        if entry.relative.name != MANIFEST_FILENAME:
            continue
        parent = entry.relative.parent.as_posix()
        paths.append(ROOT_SKILL_PATH if parent in ("", ".") else parent)
    return paths


def find_skills(checkout: Path, source: str) -> list[ResolvedSkill]:
    """Discover every skill in ``checkout``, all tagged with its HEAD commit."""
    ref = resolve_ref(checkout)
    skills = [
        ResolvedSkill(name=path.rsplit("/", 1)[-1], source=source, path=path, ref=ref)
        for path in find_skill_paths(checkout)
    ]
    logger.debug("Found %d skill(s) in %s at %s", len(skills), source, ref)
    return skills


def skill_dir_in_checkout(checkout: Path, path: str | None) -> Path:
    """Return the directory for ``path`` inside ``checkout``, requiring a manifest.

    A ``path`` of None or ``"."`` means the checkout root, which is returned
    without a manifest check so that whole-repo installs keep working.

    Raises:
        ResolutionError: If ``path`` escapes the checkout or holds no
            manifest. The error lists the skills that do exist.
    """
    root = Path(checkout)
    if not path or path == ROOT_SKILL_PATH:
        return root
    target = (root / path).resolve()
    if not target.is_relative_to(root.resolve()) or not (target / MANIFEST_FILENAME).is_file():
        raise ResolutionError(
            f"No {MANIFEST_FILENAME} at '{path}' in checkout",
            available=find_skill_paths(root),
        )
    return target
