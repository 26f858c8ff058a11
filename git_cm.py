#!/usr/bin/env python
"""
Thin wrapper script to invoke the gitcm CLI.

Running ``python git_cm.py`` is equivalent to running the ``git-cm``
console script installed via ``pyproject.toml``.
"""

from gitcm.cli import main


if __name__ == "__main__":
    main(prog_name="git-cm")
