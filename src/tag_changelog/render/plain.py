"""Itemized changelog listing: one bullet per commit."""

from __future__ import annotations

from typing import List

from tag_changelog.grouping.group_model import CommitGroup
from tag_changelog.render.base import Renderer


class PlainRenderer(Renderer):
    """Render each group as a bullet list.

    Entries look like ``- `abc1234` **scope:** subject``; the scope part
    is omitted when the commit has none.
    """

    def render_group(self, group: CommitGroup) -> List[str]:
        lines = []
        for entry in group.commits:
            scope = f"**{entry.scope}:** " if entry.scope else ""
            lines.append(f"- `{entry.commit.short_sha}` {scope}{self.entry_text(entry)}")
        return lines
