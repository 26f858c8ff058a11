"""
Version control integration.

This package contains the :class:`GitClient` used to query staged
changes and to create commits.
"""

from .git_client import GitClient, GitError  # noqa: F401
