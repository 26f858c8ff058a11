"""
Opening a commit message file in the user's text editor.

The editor is chosen from, in order: an explicit override (``--editor``),
the ``EDITOR`` and ``VISUAL`` environment variables, and the first of
:data:`PROBE_ORDER` found on ``PATH``. The editor runs attached to the
terminal and the call blocks until it exits.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence, Union


logger = logging.getLogger(__name__)

PROBE_ORDER = ("vim", "nano")


class EditorError(Exception):
    """Base class for editor failures."""

    pass


class NoEditorAvailable(EditorError):
    """Raised when no editor is configured and none could be found."""

    def __init__(self) -> None:
        super().__init__("No suitable text editor found. Please set EDITOR environment variable.")


class EditorFailed(EditorError):
    """Raised when the editor could not be started or exited non-zero."""

    def __init__(self, exit_code: Optional[int], detail: str = "") -> None:
        message = detail or f"Editor exited with code {exit_code}"
        super().__init__(message)
        self.exit_code = exit_code


class EditorBridge:
    """Resolve and run an interactive editor.

    Parameters
    ----------
    override : str, optional
        Editor command that takes precedence over the environment.
    environ : Mapping[str, str], optional
        Environment to read ``EDITOR``/``VISUAL`` from. Defaults to
        ``os.environ``.
    which : callable, optional
        Lookup used to probe for installed editors. Defaults to
        :func:`shutil.which`.
    """

    def __init__(
        self,
        override: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        which: Callable[[str], Optional[str]] = shutil.which,
        probe_order: Sequence[str] = PROBE_ORDER,
    ) -> None:
        self.override = override
        self.environ = os.environ if environ is None else environ
        self.which = which
        self.probe_order = tuple(probe_order)

    def resolve_editor(self) -> str:
        if self.override:
            return self.override
        env_editor = self.environ.get("EDITOR") or self.environ.get("VISUAL")
        if env_editor:
            return env_editor
        for candidate in self.probe_order:
            if self.which(candidate):
                return candidate
        raise NoEditorAvailable()

    def open(self, path: Union[str, Path], editor: str) -> None:
        """Open ``path`` in ``editor`` and wait for it to exit.

        ``editor`` may carry arguments (``"code --wait"``); it is split
        with shell quoting rules.

        Raises
        ------
        EditorFailed
            If the editor cannot be started or exits with a non-zero code.
        """
        try:
            command = shlex.split(editor) + [str(path)]
        except ValueError as exc:
            raise EditorFailed(None, f"Invalid editor command '{editor}': {exc}") from exc
        logger.debug("Launching editor: %s", command)
        try:
            result = subprocess.run(command)
        except OSError as exc:
            raise EditorFailed(None, f"Could not start editor '{editor}': {exc}") from exc
        if result.returncode != 0:
            raise EditorFailed(result.returncode)
