"""
Configuration loader for tag_changelog.

The tool reads a YAML file, ``.changelog.yml`` in the current directory
by default::

    git_path: .
    ignore: "[skip changelog]"
    output_format: table
    show_author: true
    commit_groups:
      title_maps:
        breaking: Breaking Changes
        feat: Features
        fix: Bug Fixes

All keys are optional. The declaration order of ``title_maps`` decides
the order of the commit-type sections in the output. If the file is
missing, malformed, or holds values of the wrong type, a
:class:`ConfigLoadError` is raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping

import yaml


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where logging is not configured. Messages still propagate to the root
# logger once the CLI configures it.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_CONFIG_FILE = ".changelog.yml"
BREAKING_KEY = "breaking"
OUTPUT_FORMATS = ("table", "list")


class ConfigLoadError(Exception):
    """Raised when the changelog configuration file is missing or invalid."""

    pass


@dataclass(frozen=True)
class ChangelogConfig:
    """Immutable changelog settings, loaded once per run.

    Attributes
    ----------
    git_path : str
        Location of the repository to read.
    ignore : str
        Commits whose message contains this substring are skipped.
    title_maps : Mapping[str, str]
        Commit type to section title, in display order. The reserved
        keys ``breaking`` and ``other`` title those sections.
    output_format : str
        ``table`` for a markdown table per group, ``list`` for bullets.
    show_author : bool
        Whether the table layout includes an Author column.
    """

    git_path: str = "."
    ignore: str = ""
    title_maps: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    output_format: str = "table"
    show_author: bool = True


def _read_title_maps(data: Dict[str, Any]) -> Mapping[str, str]:
    groups = data.get("commit_groups")
    if groups is None:
        return MappingProxyType({})
    if not isinstance(groups, dict):
        raise ConfigLoadError("'commit_groups' must be a mapping")
    titles = groups.get("title_maps")
    if titles is None:
        return MappingProxyType({})
    if not isinstance(titles, dict):
        raise ConfigLoadError("'commit_groups.title_maps' must be a mapping")
    result: Dict[str, str] = {}
    for key, title in titles.items():
        if not isinstance(title, str):
            raise ConfigLoadError(f"Title for commit group '{key}' must be a string")
        result[str(key)] = title
    return MappingProxyType(result)


def parse_config(data: Any) -> ChangelogConfig:
    """Validate a decoded YAML document and build a :class:`ChangelogConfig`.

    An empty document yields the defaults.

    Raises
    ------
    ConfigLoadError
        If the document or any of its values has the wrong type.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError("Configuration must be a YAML mapping")

    git_path = data.get("git_path", ".")
    if not isinstance(git_path, str):
        raise ConfigLoadError("'git_path' must be a string")
    ignore = data.get("ignore", "")
    if ignore is None:
        ignore = ""
    if not isinstance(ignore, str):
        raise ConfigLoadError("'ignore' must be a string")
    output_format = data.get("output_format", "table")
    if output_format not in OUTPUT_FORMATS:
        raise ConfigLoadError(
            f"'output_format' must be one of: {', '.join(OUTPUT_FORMATS)}"
        )
    show_author = data.get("show_author", True)
    if not isinstance(show_author, bool):
        raise ConfigLoadError("'show_author' must be a boolean")

    return ChangelogConfig(
        git_path=git_path or ".",
        ignore=ignore,
        title_maps=_read_title_maps(data),
        output_format=output_format,
        show_author=show_author,
    )


def load_config(path: Path) -> ChangelogConfig:
    """Load the changelog configuration from the YAML file at ``path``.

    Raises
    ------
    ConfigLoadError
        If the file is missing, is not valid YAML, or fails validation.
    """
    if not path.is_file():
        logger.error("Configuration file '%s' does not exist", path)
        raise ConfigLoadError(f"Missing changelog configuration file: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigLoadError(f"Invalid YAML in {path.name}: {exc}") from exc

    config = parse_config(data)
    logger.debug("Loaded changelog configuration from: %s", path)
    logger.debug("Configuration data: %s", config)
    return config
