"""
Common rendering logic.

:class:`Renderer` walks the tag sections, writes the per-tag headings
and delegates the layout of each commit group to a subclass.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from tag_changelog.config.loader import ChangelogConfig
from tag_changelog.grouping.commit_parser import ParsedCommit
from tag_changelog.grouping.group_model import CommitGroup, TagSection
from tag_changelog.grouping.grouper import group_section


NO_COMMITS_LINE = "_No commits between these tags_"
CURRENT_RELEASE_SUFFIX = " - Current Release"
BREAKING_MARKER = "⚠️  "


class Renderer:
    """Base class for changelog output formats.

    Parameters
    ----------
    config : ChangelogConfig
        Supplies group titles and display options.
    current : str, optional
        Name of the tag to mark as the current release.
    """

    def __init__(self, config: ChangelogConfig, current: Optional[str] = None) -> None:
        self.config = config
        self.current = current or None

    def render(self, sections: Iterable[TagSection]) -> str:
        """Render all sections as one markdown document."""
        lines: List[str] = []
        for section in sections:
            lines.extend(self.render_section(section))
        return "\n".join(lines) + "\n" if lines else ""

    def render_section(self, section: TagSection) -> List[str]:
        title = f"## {section.tag_name}"
        if self.current is not None and section.tag_name == self.current:
            title += CURRENT_RELEASE_SUFFIX
        lines = [title, ""]

        if not section.entries:
            lines.extend([NO_COMMITS_LINE, ""])
            return lines

        grouped = group_section(section, self.config)
        if grouped.breaking.commits:
            lines.append(f"### {BREAKING_MARKER}{grouped.breaking.title}")
            lines.append("")
            lines.extend(self.render_group(grouped.breaking))
            lines.append("")
        for group in grouped.groups:
            lines.append(f"### {group.title}")
            lines.append("")
            lines.extend(self.render_group(group))
            lines.append("")
        return lines

    def render_group(self, group: CommitGroup) -> List[str]:
        """Return the lines listing the commits of ``group``."""
        raise NotImplementedError

    @staticmethod
    def entry_text(entry: ParsedCommit) -> str:
        return entry.description
