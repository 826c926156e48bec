"""Normalisation of user-supplied source identifiers into clonable URLs.

Accepted forms::

    anthropics/skills                                  -> GitHub shorthand
    https://github.com/org/repo/tree/main/skills/pdf   -> pasted browser URL
    https://gitlab.com/group/sub/repo/-/tree/main/x    -> GitLab subgroup URL
    git@github.com:org/repo.git                        -> SSH, unchanged
    https://git.example.com/team/repo                  -> self-hosted, unchanged
    /home/me/skills                                    -> local path, unchanged

``expand_source`` is idempotent: feeding its output back in is a no-op.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from skills_lock.constants import PRIMARY_HOST, SECONDARY_HOST

_SHORTHAND_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")
_GITLAB_TREE_MARKER = "/-/tree/"


def _strip_git_suffix(name: str) -> str:
    return name[:-4] if name.endswith(".git") else name


def _expand_github(path: str) -> str | None:
    # /owner/repo[/tree/<branch>[/<path>]]: keep owner and repo only.
    segments = path.split("/")
    if len(segments) < 3 or not segments[1] or not segments[2]:
        return None
    owner, repo = segments[1], _strip_git_suffix(segments[2])
    if not repo:
        return None
    return f"https://{PRIMARY_HOST}/{owner}/{repo}.git"


def _expand_gitlab(path: str) -> str | None:
    # Everything before /-/tree/ is the project path, however deep the subgroups go.
    marker = path.find(_GITLAB_TREE_MARKER)
    repo_path = path[:marker] if marker != -1 else path
    repo_path = _strip_git_suffix(repo_path.rstrip("/"))
    if not repo_path.strip("/"):
        return None
    return f"https://{SECONDARY_HOST}{repo_path}.git"


def expand_source(source: str) -> str:
    """Expand a source identifier to a canonical clone URL.

    - ``git@`` SSH identifiers are returned unchanged.
    - GitHub HTTP(S) URLs keep only owner and repo, drop any ``/tree/...``
      suffix, and end in ``.git``.
    - GitLab HTTP(S) URLs are cut at ``/-/tree/`` and end in ``.git``.
    - Other HTTP(S) URLs are returned unchanged.
    - ``owner/repo`` shorthand becomes a GitHub URL, even when a segment is
      only dots (``../x``). Callers that accept local paths must check for
      an existing directory themselves.
    - Anything else is returned verbatim.
    """
    if source.startswith("git@"):
        return source

    if source.startswith(("http://", "https://")):
        try:
            parts = urlsplit(source)
            host = (parts.hostname or "").lower()
        except ValueError:
            return source
        if host == PRIMARY_HOST:
            return _expand_github(parts.path) or source
        if host == SECONDARY_HOST:
            return _expand_gitlab(parts.path) or source
        return source

    match = _SHORTHAND_RE.match(source)
    if match:
        return f"https://{PRIMARY_HOST}/{source}.git"

    return source
