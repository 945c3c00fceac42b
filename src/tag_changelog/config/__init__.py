"""
Configuration loading for tag_changelog.

Provides the loader for the ``.changelog.yml`` file. See
:mod:`tag_changelog.config.loader` for implementation details.
"""

from .loader import ChangelogConfig, ConfigLoadError, load_config  # noqa: F401
