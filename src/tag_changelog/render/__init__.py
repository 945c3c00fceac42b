"""
Output formats for the changelog.

:class:`PlainRenderer` writes bullet lists and
:class:`MarkdownTableRenderer` writes one markdown table per group.
Use :func:`get_renderer` to pick one by its configured name.
"""

from __future__ import annotations

from typing import Dict, Optional, Type

from tag_changelog.config.loader import ChangelogConfig

from .base import Renderer  # noqa: F401
from .markdown import MarkdownTableRenderer, escape_pipes  # noqa: F401
from .plain import PlainRenderer  # noqa: F401


RENDERERS: Dict[str, Type[Renderer]] = {
    "table": MarkdownTableRenderer,
    "list": PlainRenderer,
}


def get_renderer(config: ChangelogConfig, current: Optional[str] = None) -> Renderer:
    """Return the renderer selected by ``config.output_format``."""
    try:
        renderer_cls = RENDERERS[config.output_format]
    except KeyError:
        raise ValueError(f"Unknown output format: {config.output_format}") from None
    return renderer_cls(config, current=current)
