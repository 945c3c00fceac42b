"""
Grouping of parsed commits into changelog sections.

Commits are first filtered by the configured ignore substring and
parsed. At display time breaking changes are pulled into their own
group and the remaining commits are grouped by type, in the order the
types are declared under ``commit_groups.title_maps``. The ``other``
bucket is appended last when it is not configured explicitly. Commits
whose type is neither configured nor ``other`` are not displayed.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from tag_changelog.config.loader import BREAKING_KEY, ChangelogConfig
from tag_changelog.grouping.commit_parser import (
    DEFAULT_TYPE,
    ParsedCommit,
    parse_commit,
    should_ignore_commit,
)
from tag_changelog.grouping.group_model import CommitGroup, GroupedSection, TagSection
from tag_changelog.vcs.git_client import Commit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

DEFAULT_TITLES = {
    BREAKING_KEY: "Breaking Changes",
    DEFAULT_TYPE: "Other",
}


def group_title(key: str, config: ChangelogConfig) -> str:
    """Return the heading for ``key``, falling back to a capitalized default."""
    title = config.title_maps.get(key)
    if title:
        return title
    return DEFAULT_TITLES.get(key, key.capitalize())


def build_section(tag_name: str, commits: Iterable[Commit], config: ChangelogConfig) -> TagSection:
    """Filter ignored commits and parse the rest, preserving order."""
    entries = [
        parse_commit(commit)
        for commit in commits
        if not should_ignore_commit(commit.message, config.ignore)
    ]
    return TagSection(tag_name=tag_name, entries=entries)


def group_section(section: TagSection, config: ChangelogConfig) -> GroupedSection:
    """Arrange a section's entries into breaking changes and typed groups."""
    breaking: List[ParsedCommit] = []
    by_type: Dict[str, List[ParsedCommit]] = {}
    for entry in section.entries:
        if entry.is_breaking:
            breaking.append(entry)
        else:
            by_type.setdefault(entry.type, []).append(entry)

    order = [key for key in config.title_maps if key != BREAKING_KEY and key in by_type]
    if DEFAULT_TYPE in by_type and DEFAULT_TYPE not in order:
        order.append(DEFAULT_TYPE)

    dropped = [key for key in by_type if key not in order]
    if dropped:
        logger.debug(
            "Tag %s: not displaying unconfigured commit type(s): %s",
            section.tag_name,
            ", ".join(sorted(dropped)),
        )

    return GroupedSection(
        tag_name=section.tag_name,
        breaking=CommitGroup(
            type=BREAKING_KEY, title=group_title(BREAKING_KEY, config), commits=breaking
        ),
        groups=[
            CommitGroup(type=key, title=group_title(key, config), commits=by_type[key])
            for key in order
        ],
    )
