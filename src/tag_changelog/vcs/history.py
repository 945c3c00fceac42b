"""Commit ranges between tag boundaries."""

from __future__ import annotations

import logging
from typing import List, Optional

from tag_changelog.vcs.git_client import Commit, GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def commits_between(client: GitClient, from_sha: Optional[str], to_sha: str) -> List[Commit]:
    """Return the commits reachable from ``to_sha`` down to ``from_sha``.

    Commits are returned newest-first. ``to_sha`` is included and
    ``from_sha`` is excluded; when ``from_sha`` is None the whole
    ancestry of ``to_sha`` is returned.

    If ``from_sha`` is never reached (it is not an ancestor of
    ``to_sha``) every visited commit is returned and a warning is
    logged, since the range then covers more than one release.

    Raises
    ------
    HistoryWalkError
        If history cannot be opened or iterated.
    """
    commits: List[Commit] = []
    with client.log(to_sha) as history:
        for commit in history:
            if from_sha is not None and commit.sha == from_sha:
                break
            commits.append(commit)
        else:
            if from_sha is not None:
                logger.warning(
                    "Boundary commit %s is not an ancestor of %s; "
                    "including all %d reachable commit(s)",
                    from_sha[:7],
                    to_sha[:7],
                    len(commits),
                )
    return commits
