"""
Fixed menus offered before a commit message is drafted.

Commit types follow the Conventional Commits categories; languages are
the locales the drafting prompts are written for.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from gitcm.models import SelectionOption


COMMIT_TYPES: List[SelectionOption] = [
    SelectionOption("feat", "feat", "A new feature", "✨"),
    SelectionOption("fix", "fix", "A bug fix", "🐛"),
    SelectionOption("docs", "docs", "Documentation only changes", "📚"),
    SelectionOption("style", "style", "Changes that do not affect the meaning of the code", "💎"),
    SelectionOption("refactor", "refactor", "A code change that neither fixes a bug nor adds a feature", "📦"),
    SelectionOption("perf", "perf", "A code change that improves performance", "🚀"),
    SelectionOption("test", "test", "Adding missing tests or correcting existing tests", "🧪"),
    SelectionOption("build", "build", "Changes that affect the build system or external dependencies", "🔧"),
    SelectionOption("ci", "ci", "Changes to our CI configuration files and scripts", "🔄"),
    SelectionOption("chore", "chore", "Other changes that don't modify src or test files", "🧹"),
    SelectionOption("revert", "revert", "Reverts a previous commit", "⏪"),
]

LANGUAGE_OPTIONS: List[SelectionOption] = [
    SelectionOption("english", "English", emoji="🇺🇸"),
    SelectionOption("indonesian", "Bahasa Indonesia", emoji="🇮🇩"),
]


def find_option(options: Sequence[SelectionOption], value: str) -> Optional[SelectionOption]:
    for option in options:
        if option.value == value:
            return option
    return None


def language_name(value: str) -> str:
    """Human readable name of a language value, falling back to the value."""
    option = find_option(LANGUAGE_OPTIONS, value)
    return option.name if option else value
