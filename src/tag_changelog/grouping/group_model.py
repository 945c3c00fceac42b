"""
Data models for changelog sections.

A :class:`TagSection` holds the parsed commits that belong to one tag
boundary. Grouping turns it into a :class:`GroupedSection`: the
breaking changes plus one :class:`CommitGroup` per displayed commit
type, in display order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from tag_changelog.grouping.commit_parser import ParsedCommit


@dataclass
class CommitGroup:
    """Representation of one commit-type section.

    Attributes
    ----------
    type : str
        The Conventional Commit type (feat, fix, other, ...).
    title : str
        Heading shown for the group.
    commits : List[ParsedCommit]
        Commits of this type, newest-first.
    """

    type: str
    title: str
    commits: List[ParsedCommit] = field(default_factory=list)


@dataclass
class TagSection:
    """Filtered, parsed commits between a tag and its predecessor."""

    tag_name: str
    entries: List[ParsedCommit] = field(default_factory=list)


@dataclass
class GroupedSection:
    """A :class:`TagSection` arranged for display."""

    tag_name: str
    breaking: CommitGroup
    groups: List[CommitGroup] = field(default_factory=list)
