"""
Git client implementation for gitcm.

This module wraps the handful of Git operations the commit assistant
needs: listing staged files, reading the staged diff and its numeric
statistics, and creating a commit either from a title/body pair or from
a commit message file. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import List, Union

from gitcm.models import CommitDraft, DiffStats, StagedChangeSet


logger = logging.getLogger(__name__)

COMMIT_FILE_PREFIX = "commit-msg-"
COMMIT_FILE_SUFFIX = ".txt"


class GitError(Exception):
    """Raised when a Git command fails.

    The message carries Git's standard error output.
    """

    pass


def _to_int(field: str) -> int:
    try:
        return int(field.strip())
    except ValueError:
        return 0


def parse_numstat(output: str) -> DiffStats:
    """Parse ``git diff --numstat`` output into :class:`DiffStats`.

    Every non-empty line counts as one changed file. The first two
    tab-separated fields are the added and removed line counts; fields
    that are not numbers (``-`` for binary files) count as zero.
    """
    lines = [line for line in output.strip().splitlines() if line.strip()]
    insertions = 0
    deletions = 0
    for line in lines:
        fields = line.split("\t")
        insertions += _to_int(fields[0])
        if len(fields) > 1:
            deletions += _to_int(fields[1])
    return DiffStats(files_changed=len(lines), insertions=insertions, deletions=deletions)


def format_commit_file(title: str, body: str = "") -> str:
    """Render a commit message file: title, blank line, body."""
    if body:
        return f"{title}\n\n{body}"
    return title


def parse_commit_file(content: str) -> CommitDraft:
    """Split a commit message file back into title and body.

    The first line is the title; everything after it, with the blank
    separator and surrounding whitespace removed, is the body.
    """
    lines = content.splitlines()
    if not lines:
        return CommitDraft(title="", body="")
    title = lines[0].strip()
    body = "\n".join(lines[1:]).strip()
    return CommitDraft(title=title, body=body)


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Union[str, Path]) -> None:
        self.repo_root = Path(repo_root)

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if ``path`` is the root of a Git working tree."""
        return (Path(path) / ".git").exists()

    def is_repository(self) -> bool:
        return self.is_repo(self.repo_root)

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is
            True, or if the ``git`` executable cannot be started.
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
            logger.error("Failed to run git: %s", exc)
            raise GitError(f"Failed to run git: {exc}") from exc

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Staged changes
    # ------------------------------------------------------------------
    def list_staged_files(self) -> List[str]:
        """Return the staged file paths in the order Git reports them."""
        result = self._run(["diff", "--staged", "--name-only"])
        return [line for line in result.stdout.splitlines() if line.strip()]

    def get_staged_diff(self) -> str:
        """Return the unified diff of all staged changes."""
        return self._run(["diff", "--staged"]).stdout

    def get_diff_stats(self) -> DiffStats:
        """Return files changed, insertions and deletions of the staged diff."""
        result = self._run(["diff", "--staged", "--numstat"])
        return parse_numstat(result.stdout)

    def collect_staged_changes(self) -> StagedChangeSet:
        """Gather staged files, diff and statistics in one value.

        A convenience for library callers that want a single snapshot.
        :class:`~gitcm.workflow.CommitWorkflow` does not use it: it reads
        the statistics only after a draft was produced.
        """
        files = self.list_staged_files()
        if not files:
            return StagedChangeSet()
        return StagedChangeSet(
            files=files,
            diff=self.get_staged_diff(),
            stats=self.get_diff_stats(),
        )

    # ------------------------------------------------------------------
    # Committing
    # ------------------------------------------------------------------
    def create_commit(self, title: str, body: str = "") -> None:
        """Commit the staged changes with ``title`` and an optional body.

        The title and body are passed as separate ``-m`` arguments so Git
        inserts the blank separator line itself.
        """
        args = ["commit", "-m", title]
        if body:
            args += ["-m", body]
        self._run(args)

    def write_commit_file(self, title: str, body: str = "") -> Path:
        """Write a commit message to a new temporary file and return its path.

        The caller owns the file and is responsible for deleting it. If
        writing fails the file is removed before the error propagates.
        """
        with tempfile.NamedTemporaryFile(
            mode="w",
            prefix=COMMIT_FILE_PREFIX,
            suffix=COMMIT_FILE_SUFFIX,
            delete=False,
            encoding="utf-8",
        ) as tmp:
            try:
                tmp.write(format_commit_file(title, body))
            except Exception:
                tmp.close()
                Path(tmp.name).unlink(missing_ok=True)
                raise
        logger.debug("Wrote commit message file %s", tmp.name)
        return Path(tmp.name)

    def read_commit_file(self, path: Union[str, Path]) -> CommitDraft:
        return parse_commit_file(Path(path).read_text(encoding="utf-8"))

    def commit_from_file(self, path: Union[str, Path]) -> None:
        """Commit the staged changes using the message stored in ``path``."""
        self._run(["commit", "-F", str(path)])
