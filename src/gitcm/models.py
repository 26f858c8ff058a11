"""
Value objects shared by the gitcm components.

Everything here is created fresh for a single run and never mutated:
the staged change set read from Git, the drafted commit message, the
user's final decision and the fixed selection options offered in the
prompts.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class DiffStats:
    """Summary of the staged diff.

    Attributes
    ----------
    files_changed : int
        Number of files reported by ``git diff --numstat``.
    insertions : int
        Sum of added lines over all files.
    deletions : int
        Sum of removed lines over all files.
    """

    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0

    def summary_lines(self) -> List[str]:
        return [
            f"Files changed: {self.files_changed}",
            f"Insertions: {self.insertions}",
            f"Deletions: {self.deletions}",
        ]


@dataclass(frozen=True)
class StagedChangeSet:
    """The staged files, their full diff and its statistics.

    Built by :meth:`GitClient.collect_staged_changes` for library use; the
    interactive workflow fetches the same pieces one step at a time.
    """

    files: List[str] = field(default_factory=list)
    diff: str = ""
    stats: DiffStats = field(default_factory=DiffStats)

    @property
    def is_empty(self) -> bool:
        return not self.files


@dataclass(frozen=True)
class CommitDraft:
    """A commit title and its (possibly empty) description."""

    title: str
    body: str = ""

    def to_message(self) -> str:
        """Render the draft the way Git expects a commit message file."""
        if self.body:
            return f"{self.title}\n\n{self.body}"
        return self.title


class UserDecision(enum.Enum):
    """What the user wants to do with the drafted message."""

    USE = "use"
    EDIT = "edit"
    CANCEL = "cancel"


@dataclass(frozen=True)
class SelectionOption:
    """One entry of a fixed single-choice menu."""

    value: str
    name: str
    description: str = ""
    emoji: str = ""
