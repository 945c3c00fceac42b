"""
Version control system (VCS) integration.

This package contains the read-only Git client used to enumerate tags,
resolve them to commits, and walk the history between tag boundaries.
"""

from .git_client import (  # noqa: F401
    Commit,
    GitClient,
    GitError,
    HistoryWalkError,
    RepositoryOpenError,
    TagResolutionError,
)
from .history import commits_between  # noqa: F401
from .tags import TagDescriptor, load_tags  # noqa: F401
