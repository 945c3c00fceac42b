"""
Tag loading for tag_changelog.

Turns the repository's tag references into :class:`TagDescriptor`
objects sorted newest-first by the commit time of the tagged commit.
Lightweight tags point straight at a commit; annotated tags need one
extra resolution step through the tag object.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from tag_changelog.vcs.git_client import Commit, GitClient, GitError, TagResolutionError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class TagDescriptor:
    """A tag resolved to the commit it marks.

    Attributes
    ----------
    name : str
        Short tag name, e.g. ``v1.2.0``.
    sha : str
        Object the reference points at (the tag object for annotated tags).
    timestamp : int
        Committer time of ``commit`` in unix seconds.
    commit : Commit
        The tagged commit.
    """

    name: str
    sha: str
    timestamp: int
    commit: Commit


def resolve_tag_commit(client: GitClient, name: str, sha: str) -> Commit:
    """Resolve a tag reference to a commit.

    ``sha`` is first tried as a commit; if that fails it is treated as
    an annotated tag object and its target commit is returned.

    Raises
    ------
    TagResolutionError
        If neither resolution succeeds.
    """
    try:
        return client.commit_object(sha)
    except GitError as direct_exc:
        logger.debug("Tag %s is not a direct commit (%s); trying tag object", name, direct_exc)
    try:
        return client.tag_commit(sha)
    except GitError as exc:
        logger.error("Failed to resolve tag %s (%s): %s", name, sha, exc)
        raise TagResolutionError(f"Cannot resolve tag '{name}' ({sha}) to a commit: {exc}") from exc


def load_tags(client: GitClient) -> List[TagDescriptor]:
    """Load every tag in the repository, sorted newest-first.

    The sort is stable, so tags whose commits share a timestamp keep
    the order in which the repository enumerated them. A single
    unresolvable tag aborts the whole load.

    Raises
    ------
    TagResolutionError
        If the tag references cannot be listed or any tag fails to resolve.
    """
    try:
        refs = client.list_tag_refs()
    except GitError as exc:
        raise TagResolutionError(f"Failed to iterate tags: {exc}") from exc

    tags = []
    for ref in refs:
        commit = resolve_tag_commit(client, ref.name, ref.sha)
        tags.append(
            TagDescriptor(name=ref.name, sha=ref.sha, timestamp=commit.timestamp, commit=commit)
        )

    tags.sort(key=lambda tag: tag.timestamp, reverse=True)
    logger.debug("Loaded %d tag(s)", len(tags))
    return tags
