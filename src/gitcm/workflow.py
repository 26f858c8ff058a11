"""
The interactive commit workflow.

:class:`CommitWorkflow` runs one session of the assistant, strictly one
step at a time:

1. check that the target directory is a Git working tree,
2. list the staged files,
3. ask for a commit type and a message language,
4. read the staged diff,
5. draft a title and description, then read the diff statistics,
6. show the draft and the statistics,
7. ask whether to use, edit or cancel,
8. commit directly, commit from an edited file, or stop.

Every collaborator is passed in, so tests can hand in doubles. Each
failure is reported once and ends the run with :data:`EXIT_FAILURE`;
nothing is retried. Cancelling is not a failure.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import Iterator

from gitcm.config.options import COMMIT_TYPES, LANGUAGE_OPTIONS, language_name
from gitcm.editor import EditorBridge, EditorError
from gitcm.llm.commit_drafter import CommitDrafter, DraftGenerationFailed
from gitcm.models import CommitDraft, UserDecision
from gitcm.ui import Console, PromptAborted
from gitcm.vcs.git_client import GitClient, GitError


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

HEADER = "📝 Git Commit Message Generator"
CANCEL_MESSAGE = "Commit cancelled. You can create your own commit message with 'git commit'."


class WorkflowError(Exception):
    """Base class for failures that end a workflow run."""

    label = "Failed to generate commit"


class NotARepository(WorkflowError):
    label = "Not a git repository"


class NothingStaged(WorkflowError):
    label = "No staged changes found. Use 'git add' to stage your changes first."


class CommitFailed(WorkflowError):
    label = "Failed to create commit"


class CommitWorkflow:
    """Sequence validation, drafting, the user's decision and the commit.

    Parameters
    ----------
    git : GitClient
        Gateway to the repository being committed to.
    drafter : CommitDrafter
        Drafting service; called exactly once per run that reaches it.
    editor : EditorBridge
        Used only when the user chooses to edit the draft.
    console : Console
        Output and prompts.
    """

    def __init__(
        self,
        git: GitClient,
        drafter: CommitDrafter,
        editor: EditorBridge,
        console: Console,
    ) -> None:
        self.git = git
        self.drafter = drafter
        self.editor = editor
        self.console = console

    def run(self) -> int:
        """Run one session and return the process exit status."""
        self.console.header(HEADER)
        try:
            return self._run()
        except PromptAborted:
            self.console.warning(CANCEL_MESSAGE)
            return EXIT_SUCCESS
        except NothingStaged as exc:
            self.console.warning(exc.label)
            return EXIT_FAILURE
        except WorkflowError as exc:
            self.console.error(exc.label, exc.__cause__ or str(exc))
            return EXIT_FAILURE
        except DraftGenerationFailed as exc:
            self.console.error("Failed to generate commit message", exc)
            return EXIT_FAILURE
        except EditorError as exc:
            self.console.error("Failed to open editor", exc)
            return EXIT_FAILURE
        except GitError as exc:
            self.console.error("Failed to generate commit", exc)
            return EXIT_FAILURE

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _run(self) -> int:
        if not self.git.is_repository():
            raise NotARepository(str(self.git.repo_root))

        staged_files = self.git.list_staged_files()
        if not staged_files:
            raise NothingStaged()
        self.console.success(f"Found {len(staged_files)} staged file(s)")

        commit_type = self.console.select("Select commit type:", COMMIT_TYPES)
        language = self.console.select("Select language for commit message:", LANGUAGE_OPTIONS)
        logger.debug("Selected type=%s language=%s", commit_type, language)

        self.console.info("Analyzing changes...")
        diff = self.git.get_staged_diff()

        self.console.info(f"Generating commit message in {language_name(language)}...")
        draft = self.drafter.generate(diff, commit_type, language)
        stats = self.git.get_diff_stats()

        self.console.success("Generated commit:")
        self.console.delimiter()
        self.console.box("Generated Commit Message ✨", draft.to_message())
        self.console.box("Commit Statistic 📊", "\n".join(stats.summary_lines()), fg="blue")
        self.console.delimiter()

        decision = self.console.decide()
        logger.debug("User decision: %s", decision.value)

        if decision is UserDecision.USE:
            return self._commit(draft)
        if decision is UserDecision.EDIT:
            return self._edit_and_commit(draft)
        self.console.warning(CANCEL_MESSAGE)
        return EXIT_SUCCESS

    def _commit(self, draft: CommitDraft) -> int:
        try:
            self.git.create_commit(draft.title, draft.body)
        except GitError as exc:
            raise CommitFailed(str(exc)) from exc
        self.console.success("Commit created successfully!")
        return EXIT_SUCCESS

    def _edit_and_commit(self, draft: CommitDraft) -> int:
        with self._commit_message_file(draft) as path:
            self.console.info("Opening editor to modify commit message...")
            self.console.info("- First line: Commit message (title)", indent=1)
            self.console.info("- Leave one blank line", indent=1)
            self.console.info("- Rest: Commit description (markdown format)", indent=1)

            editor = self.editor.resolve_editor()
            self.console.info(f"Opening {editor} to edit commit message...")
            self.editor.open(path, editor)
            self.console.info("Editor closed. Proceeding with edited commit message...")

            try:
                edited = self.git.read_commit_file(path)
            except (OSError, UnicodeDecodeError) as exc:
                raise CommitFailed(f"Could not read edited commit message: {exc}") from exc
            if not edited.title:
                raise CommitFailed("Aborting commit due to empty commit message")
            logger.debug("Edited commit title: %s", edited.title)

            try:
                self.git.commit_from_file(path)
            except GitError as exc:
                raise CommitFailed(str(exc)) from exc
        self.console.success("Commit created successfully with edited message!")
        return EXIT_SUCCESS

    @contextlib.contextmanager
    def _commit_message_file(self, draft: CommitDraft) -> Iterator[Path]:
        """Write ``draft`` to a temporary file and always delete it afterwards."""
        try:
            path = self.git.write_commit_file(draft.title, draft.body)
        except (OSError, UnicodeEncodeError) as exc:
            raise CommitFailed(f"Could not write commit message file: {exc}") from exc
        try:
            yield path
        finally:
            try:
                Path(path).unlink()
            except OSError as exc:
                logger.debug("Could not delete temporary commit file %s: %s", path, exc)
