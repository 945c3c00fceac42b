"""
Git client implementation for tag_changelog.

This module wraps the read-only Git plumbing needed to build a
changelog: enumerating tag references, resolving objects to commits,
and walking commit history. Every operation shells out to the ``git``
executable through :meth:`GitClient._run` so that unit tests can mock
the subprocess layer easily.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator, List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

# Unit and record separators emitted by the ``--format`` string below.
FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"
COMMIT_FORMAT = "%H%x1f%an%x1f%ct%x1f%B%x1e"
# Signature checks configured through log.showSignature would interleave
# gpg output with the records.
LOG_OPTIONS = ["--no-show-signature", f"--format={COMMIT_FORMAT}"]


@dataclass(frozen=True)
class Commit:
    """A commit object as read from the repository."""

    sha: str
    author_name: str
    message: str
    timestamp: int  # committer time, unix seconds

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True)
class TagRef:
    """A reference under ``refs/tags`` and the object it points at."""

    name: str
    sha: str


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class RepositoryOpenError(GitError):
    """Raised when a path is not inside a Git repository."""

    pass


class TagResolutionError(GitError):
    """Raised when a tag cannot be resolved to a commit."""

    pass


class HistoryWalkError(GitError):
    """Raised when commit history cannot be opened or iterated."""

    pass


def _parse_commit_record(record: str) -> Commit:
    """Build a :class:`Commit` from one ``COMMIT_FORMAT`` record."""
    parts = record.lstrip("\n").split(FIELD_SEP, 3)
    if len(parts) != 4:
        raise GitError(f"Malformed commit record: {record[:80]!r}")
    sha, author, timestamp, message = parts
    try:
        when = int(timestamp)
    except ValueError as exc:
        raise GitError(f"Invalid commit timestamp {timestamp!r} for {sha}") from exc
    return Commit(sha=sha, author_name=author, message=message, timestamp=when)


class CommitLog:
    """Streaming iterator over ``git log`` starting at a given commit.

    The log is a scoped resource: it spawns a ``git log`` process when
    entered and terminates it on :meth:`close`, which ``__exit__``
    always calls. Iteration may be abandoned at any point; the walk
    cannot be resumed once closed.

    Raises
    ------
    HistoryWalkError
        If the process cannot be started, its output cannot be parsed,
        or it exits with a non-zero status.
    """

    chunk_size = 8192

    def __init__(self, repo_root: Path, start: str) -> None:
        self.repo_root = repo_root
        self.start = start
        self._proc: Optional[subprocess.Popen] = None
        self._stderr: Optional[IO[str]] = None

    def __enter__(self) -> "CommitLog":
        cmd = ["git", "log", *LOG_OPTIONS, self.start, "--"]
        logger.debug("Executing Git command: %s", " ".join(cmd))
        # stderr is only read once stdout is drained, so it goes to a file.
        self._stderr = tempfile.TemporaryFile(mode="w+", encoding="utf-8", errors="replace")
        try:
            self._proc = subprocess.Popen(
                cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=self._stderr,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            self.close()
            logger.error("Failed to start git log: %s", exc)
            raise HistoryWalkError(f"Failed to open history at {self.start}: {exc}") from exc
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def __iter__(self) -> Iterator[Commit]:
        if self._proc is None:
            raise HistoryWalkError("Commit log must be opened before iterating")
        try:
            for record in self._read_records(self._proc.stdout):
                yield _parse_commit_record(record)
        except GitError as exc:
            raise HistoryWalkError(str(exc)) from exc
        returncode = self._proc.wait()
        if returncode != 0:
            stderr = self._read_stderr()
            logger.error("git log failed for %s: %s", self.start, stderr.strip())
            raise HistoryWalkError(
                stderr.strip() or f"git log exited with status {returncode}"
            )

    def _read_records(self, stream: IO[str]) -> Iterator[str]:
        buffer = ""
        while True:
            chunk = stream.read(self.chunk_size)
            if not chunk:
                break
            buffer += chunk
            *records, buffer = buffer.split(RECORD_SEP)
            for record in records:
                yield record
        if buffer.strip():
            yield buffer

    def _read_stderr(self) -> str:
        if self._stderr is None:
            return ""
        self._stderr.seek(0)
        return self._stderr.read()

    def close(self) -> None:
        """Terminate the ``git log`` process and release its output files."""
        proc, stderr = self._proc, self._stderr
        self._proc = self._stderr = None
        if proc is not None:
            if proc.poll() is None:
                proc.kill()
            if proc.stdout is not None:
                proc.stdout.close()
            proc.wait()
        if stderr is not None:
            stderr.close()


class GitClient:
    """Read-only client for the Git repository that holds the tags."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    @classmethod
    def open(cls, path: Path) -> "GitClient":
        """Return a client for the repository at or containing ``path``.

        Git itself decides whether ``path`` belongs to a repository, so
        bare repositories and linked worktrees are accepted as well.

        Raises
        ------
        RepositoryOpenError
            If ``path`` does not exist or is not inside a Git repository.
        """
        if not path.exists():
            raise RepositoryOpenError(f"Repository path does not exist: {path}")
        client = cls(path.resolve())
        try:
            git_dir = client._run(["rev-parse", "--absolute-git-dir"]).stdout.strip()
        except GitError as exc:
            raise RepositoryOpenError(f"Not a Git repository: {path}") from exc
        logger.debug("Opened Git repository at %s (git dir %s)", client.repo_root, git_dir)
        return client

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        """Run a Git command in the repository directory.

        Raises
        ------
        GitError
            If the command cannot be started or exits with a non-zero
            status.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.error("Failed to execute git: %s", exc)
            raise GitError(f"Failed to execute git: {exc}") from exc

        if result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    def _object_type(self, sha: str) -> str:
        return self._run(["cat-file", "-t", sha]).stdout.strip()

    # ------------------------------------------------------------------
    # Tags and objects
    # ------------------------------------------------------------------
    def list_tag_refs(self) -> List[TagRef]:
        """Enumerate ``refs/tags`` in Git's ref order.

        Raises
        ------
        GitError
            If the references cannot be listed.
        """
        result = self._run(
            ["for-each-ref", "--format=%(refname:lstrip=2)%09%(objectname)", "refs/tags"]
        )
        refs = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            name, _, sha = line.partition("\t")
            refs.append(TagRef(name=name, sha=sha.strip()))
        return refs

    def commit_object(self, sha: str) -> Commit:
        """Resolve ``sha`` as a commit object.

        Raises
        ------
        GitError
            If ``sha`` does not name a commit, for example when it is an
            annotated tag object.
        """
        object_type = self._object_type(sha)
        if object_type != "commit":
            raise GitError(f"Object {sha} is a {object_type}, not a commit")
        result = self._run(["log", "-1", *LOG_OPTIONS, sha, "--"])
        return _parse_commit_record(result.stdout.split(RECORD_SEP, 1)[0])

    def tag_commit(self, sha: str) -> Commit:
        """Resolve the annotated tag object ``sha`` to the commit it tags.

        Raises
        ------
        GitError
            If ``sha`` is not a tag object or its target is not a commit.
        """
        object_type = self._object_type(sha)
        if object_type != "tag":
            raise GitError(f"Object {sha} is a {object_type}, not a tag")
        headers = {}
        for line in self._run(["cat-file", "tag", sha]).stdout.splitlines():
            if not line:
                # Blank line ends the header block; the tag message follows.
                break
            key, _, value = line.partition(" ")
            headers.setdefault(key, value)
        target, target_type = headers.get("object"), headers.get("type")
        if not target or target_type != "commit":
            raise GitError(f"Tag object {sha} points at a {target_type}, not a commit")
        return self.commit_object(target)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def log(self, start: str) -> CommitLog:
        """Return a history walk from ``start``; use it as a context manager."""
        return CommitLog(self.repo_root, start)
