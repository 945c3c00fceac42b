"""
Grouping logic for changelog entries.

This package parses commit messages into Conventional Commit types and
groups them for display. See :mod:`tag_changelog.grouping.commit_parser`
and :mod:`tag_changelog.grouping.grouper` for details.
"""

from .commit_parser import ParsedCommit, parse_commit, should_ignore_commit  # noqa: F401
from .group_model import CommitGroup, GroupedSection, TagSection  # noqa: F401
from .grouper import build_section, group_section  # noqa: F401
