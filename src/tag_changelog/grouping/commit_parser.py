"""
Conventional Commit parsing.

Splits a raw commit message into type, scope, subject and body, and
detects breaking changes either from the ``!`` marker in the subject
(``feat(api)!: ...``) or from a ``BREAKING CHANGE:`` footer in the body.
Messages without a conventional prefix are classified as ``other``.
The parser is deterministic and performs no I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from tag_changelog.vcs.git_client import Commit


DEFAULT_TYPE = "other"

SUBJECT_RE = re.compile(r"^(\w+)(?:\(([^)]+)\))?(!)?:\s*(.*)$")
BREAKING_FOOTER_RE = re.compile(r"^BREAKING[- ]CHANGE:(.*)$")


@dataclass(frozen=True)
class ParsedCommit:
    """Structured view of a commit message.

    Attributes
    ----------
    commit : Commit
        The commit the message belongs to.
    type : str
        Conventional Commit type, or ``other`` when the subject has no prefix.
    scope : str
        Scope in parentheses, empty when absent.
    subject : str
        First line with the ``type(scope)!:`` prefix removed.
    body : str
        Everything after the first line, trimmed.
    is_breaking : bool
        True for a ``!`` marker or a breaking-change footer.
    breaking_message : str
        Text of the ``BREAKING CHANGE:`` footer, empty when there is none.
    """

    commit: Commit
    type: str = DEFAULT_TYPE
    scope: str = ""
    subject: str = ""
    body: str = ""
    is_breaking: bool = False
    breaking_message: str = ""

    @property
    def description(self) -> str:
        """Text shown for the entry; the footer message wins for breaking changes."""
        if self.is_breaking and self.breaking_message:
            return self.breaking_message
        return self.subject


def get_first_line(message: str) -> str:
    """Return the first line of ``message``, trimmed."""
    return message.strip().split("\n", 1)[0].strip()


def find_breaking_footer(body: str) -> Optional[str]:
    """Return the text of the first breaking-change footer line in ``body``.

    Returns None when no line starts with ``BREAKING CHANGE:`` or
    ``BREAKING-CHANGE:``.
    """
    for line in body.splitlines():
        match = BREAKING_FOOTER_RE.match(line)
        if match:
            return match.group(1).strip()
    return None


def parse_commit(commit: Commit) -> ParsedCommit:
    """Parse ``commit.message`` into a :class:`ParsedCommit`."""
    message = commit.message.strip()
    subject = get_first_line(message)

    commit_type, scope, is_breaking = DEFAULT_TYPE, "", False
    match = SUBJECT_RE.match(subject)
    if match:
        commit_type = match.group(1)
        scope = match.group(2) or ""
        is_breaking = match.group(3) == "!"
        subject = match.group(4).strip()

    body = message.split("\n", 1)[1].strip() if "\n" in message else ""
    breaking_message = ""
    footer = find_breaking_footer(body)
    if footer is not None:
        is_breaking = True
        breaking_message = footer

    return ParsedCommit(
        commit=commit,
        type=commit_type,
        scope=scope,
        subject=subject,
        body=body,
        is_breaking=is_breaking,
        breaking_message=breaking_message,
    )


def should_ignore_commit(message: str, ignore: str) -> bool:
    """Return True if ``message`` contains the ``ignore`` substring.

    An empty ``ignore`` string never matches.
    """
    if not ignore:
        return False
    return ignore in message
