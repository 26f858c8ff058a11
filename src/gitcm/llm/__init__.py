"""
Language model integration for gitcm.

This package contains the :class:`ChatCompletionClient` for talking to
a hosted chat-completion service and the :class:`CommitDrafter` which
uses it to draft commit titles and descriptions.
"""

from .chat_client import ChatCompletionClient, LLMError  # noqa: F401
from .commit_drafter import CommitDrafter, DraftGenerationFailed  # noqa: F401
