"""
Top-level package for tag_changelog.

This package exposes the main CLI entry point via the
``tag_changelog.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
