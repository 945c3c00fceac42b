"""
Markdown table output.

Every group becomes a table with ``Commit``, ``Scope``, ``Description``
and (optionally) ``Author`` columns. Cell text goes through
:func:`escape_pipes` so commit text cannot add or shift columns.
"""

from __future__ import annotations

from typing import List

from tag_changelog.grouping.group_model import CommitGroup
from tag_changelog.render.base import Renderer


def escape_pipes(text: str) -> str:
    """Escape ``|`` so ``text`` stays inside a single table cell.

    Line breaks are collapsed to spaces since a table row cannot span
    lines.
    """
    text = " ".join(text.splitlines())
    return text.replace("|", "\\|")


class MarkdownTableRenderer(Renderer):
    """Render each group as a markdown table."""

    def _header(self) -> List[str]:
        if self.config.show_author:
            return [
                "| Commit | Scope | Description | Author |",
                "|--------|-------|-------------|--------|",
            ]
        return [
            "| Commit | Scope | Description |",
            "|--------|-------|-------------|",
        ]

    def render_group(self, group: CommitGroup) -> List[str]:
        lines = self._header()
        for entry in group.commits:
            cells = [
                f"`{entry.commit.short_sha}`",
                escape_pipes(entry.scope) if entry.scope else "-",
                escape_pipes(self.entry_text(entry)),
            ]
            if self.config.show_author:
                cells.append(escape_pipes(entry.commit.author_name))
            lines.append("| " + " | ".join(cells) + " |")
        return lines
