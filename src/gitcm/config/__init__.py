"""
Configuration for gitcm.

Provides the settings loader (see :mod:`gitcm.config.loader`) and the
fixed commit-type and language menus (see :mod:`gitcm.config.options`).
"""

from .loader import ConfigError, MissingCredentialError, load_config  # noqa: F401
from .options import COMMIT_TYPES, LANGUAGE_OPTIONS  # noqa: F401
