"""
Changelog assembly.

Pairs each tag with the next-older one, collects the commits in
between, and hands the resulting sections to a renderer. The oldest
tag gets every commit back to the root of history.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from tag_changelog.config.loader import ChangelogConfig
from tag_changelog.grouping.group_model import TagSection
from tag_changelog.grouping.grouper import build_section
from tag_changelog.render.base import Renderer
from tag_changelog.vcs.git_client import GitClient
from tag_changelog.vcs.history import commits_between
from tag_changelog.vcs.tags import TagDescriptor, load_tags


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def build_tag_sections(
    client: GitClient,
    tags: Sequence[TagDescriptor],
    config: ChangelogConfig,
) -> List[TagSection]:
    """Build one section per tag, newest-first.

    ``tags`` must already be sorted newest-first, as returned by
    :func:`~tag_changelog.vcs.tags.load_tags`.

    Raises
    ------
    HistoryWalkError
        If the history between two tags cannot be read.
    """
    sections = []
    for index, tag in enumerate(tags):
        older = tags[index + 1] if index + 1 < len(tags) else None
        from_sha = older.commit.sha if older is not None else None
        commits = commits_between(client, from_sha, tag.commit.sha)
        section = build_section(tag.name, commits, config)
        logger.debug(
            "Tag %s: %d commit(s), %d after filtering",
            tag.name,
            len(commits),
            len(section.entries),
        )
        sections.append(section)
    return sections


def generate_changelog(client: GitClient, config: ChangelogConfig, renderer: Renderer) -> str:
    """Render the changelog for every tag in the repository.

    Returns an empty string when the repository has no tags.

    Raises
    ------
    TagResolutionError
        If any tag cannot be resolved to a commit.
    HistoryWalkError
        If commit history cannot be read.
    """
    tags = load_tags(client)
    if not tags:
        logger.info("No tags found in %s", client.repo_root)
        return ""
    return renderer.render(build_tag_sections(client, tags, config))
