"""
Command line interface for gitcm.

This module defines the ``main`` click command used as the entry point
of the ``git-cm`` script (so ``git cm`` works once it is on ``PATH``).
It parses the flags, configures logging, loads the settings, builds the
collaborators and hands them to :class:`~gitcm.workflow.CommitWorkflow`.
Exit status is 0 on success or cancellation and 1 on any failure.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from gitcm import __version__
from gitcm.config.loader import ConfigError, load_config
from gitcm.editor import EditorBridge
from gitcm.llm.chat_client import ChatCompletionClient
from gitcm.llm.commit_drafter import CommitDrafter
from gitcm.ui import Console
from gitcm.vcs.git_client import GitClient
from gitcm.workflow import EXIT_FAILURE, CommitWorkflow


logger = logging.getLogger(__name__)


def build_workflow(
    repo_root: Path,
    editor: Optional[str] = None,
    console: Optional[Console] = None,
) -> CommitWorkflow:
    """Wire the collaborators for a run against ``repo_root``.

    Raises
    ------
    ConfigError
        If the settings file is invalid or the API key is not set.
    """
    config = load_config()
    client = ChatCompletionClient.from_config(config)
    return CommitWorkflow(
        git=GitClient(repo_root),
        drafter=CommitDrafter(client, max_diff_length=config["max_diff_length"]),
        editor=EditorBridge(override=editor),
        console=console or Console(),
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-p",
    "--path",
    "path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Path to the git repository (defaults to the current directory).",
)
@click.option("-e", "--editor", "editor", default=None, metavar="CMD", help="Editor used for the edit option.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(__version__, "-v", "--version", prog_name="git-cm")
def main(path: Optional[Path], editor: Optional[str], verbose: bool) -> None:
    """📝 Git Commit Message Generator.

    Drafts a conventional commit message for the staged changes, lets
    you use, edit or cancel it, and commits.

    \b
    Usage:
      git cm [options]
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    console = Console()
    repo_root = path if path is not None else Path.cwd()
    logger.debug("Repository root: %s", repo_root)

    try:
        workflow = build_workflow(repo_root, editor=editor, console=console)
    except ConfigError as exc:
        console.error("Configuration error", exc)
        raise click.exceptions.Exit(EXIT_FAILURE)

    try:
        exit_code = workflow.run()
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        console.error("An unexpected error occurred", exc)
        raise click.exceptions.Exit(EXIT_FAILURE)

    raise click.exceptions.Exit(exit_code)
