import logging
import os
import shutil
import subprocess
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo ``logging.basicConfig(force=True)`` calls made by the CLI.

    The CLI installs a root handler bound to the stream that was active
    during the invocation. Under ``CliRunner`` that stream is closed
    afterwards, so the handlers are put back once each test finishes.
    """
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        yield
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


class RepoBuilder:
    """Create commits and tags in a scratch repository with fixed clocks."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.clock = 1700000000
        self.env = dict(os.environ)
        self.env.update(
            {
                "HOME": str(root.parent),
                "GIT_CONFIG_NOSYSTEM": "1",
                "GIT_AUTHOR_NAME": "Jane Doe",
                "GIT_AUTHOR_EMAIL": "jane@example.com",
                "GIT_COMMITTER_NAME": "Jane Doe",
                "GIT_COMMITTER_EMAIL": "jane@example.com",
            }
        )
        self.git("init", "-q")

    def git(self, *args: str) -> str:
        result = subprocess.run(
            ["git", *args],
            cwd=self.root,
            env=self.env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
        )
        return result.stdout.strip()

    def commit(self, message: str) -> str:
        self.clock += 60
        stamp = f"{self.clock} +0000"
        self.env["GIT_AUTHOR_DATE"] = stamp
        self.env["GIT_COMMITTER_DATE"] = stamp
        self.git("commit", "-q", "--allow-empty", "-m", message)
        return self.git("rev-parse", "HEAD")

    def tag(self, name: str, annotated: bool = False) -> None:
        if annotated:
            self.git("tag", "-a", name, "-m", f"Release {name}")
        else:
            self.git("tag", name)


@pytest.fixture
def git_repo(tmp_path: Path) -> RepoBuilder:
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    root = tmp_path / "repo"
    root.mkdir()
    return RepoBuilder(root)
