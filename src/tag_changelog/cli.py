"""
Command line interface for the tag_changelog tool.

This module defines the ``main`` function used as the entry point of
the ``changelog`` command. It loads the configuration, opens the
repository, and writes the rendered changelog to standard output.
Errors are reported on standard error with one of the exit codes
below.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from tag_changelog import __version__
from tag_changelog.changelog import generate_changelog
from tag_changelog.config.loader import DEFAULT_CONFIG_FILE, ConfigLoadError, load_config
from tag_changelog.render import get_renderer
from tag_changelog.vcs.git_client import GitClient, GitError, RepositoryOpenError

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6


def print_error(message: str) -> None:
    """Print an error message to standard error."""
    click.echo(f"✗ {message}", err=True)


@click.command()
@click.option("--current", default="", help="Mark this version tag as the current release.")
@click.option(
    "--config",
    "config_path",
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the changelog configuration file.",
)
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="changelog")
def main(current: str, config_path: Path, verbose: bool) -> None:
    """Generate a markdown changelog from git tags and Conventional Commits."""
    # Log to stderr so that stdout carries only the changelog.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        config = load_config(config_path)
    except ConfigLoadError as exc:
        print_error(f"Configuration error: {exc}")
        raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

    try:
        client = GitClient.open(Path(config.git_path))
    except RepositoryOpenError as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_NO_REPO)

    renderer = get_renderer(config, current=current or None)

    try:
        output = generate_changelog(client, config, renderer)
    except GitError as exc:
        print_error(f"Git error: {exc}")
        raise click.exceptions.Exit(EXIT_VCS_FAILURE)
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)

    click.echo(output, nl=False)
