"""
Top-level package for gitcm.

``gitcm`` drafts commit messages for staged Git changes with a hosted
chat-completion model and walks the user through committing them. The
command line entry point lives in :mod:`gitcm.cli`.
"""

import logging

__all__ = ["__version__"]

__version__ = "1.0.0"

# Library modules log through per-module loggers; output only appears once
# the CLI configures the root logger.
logging.getLogger(__name__).addHandler(logging.NullHandler())
