"""Tests for terminal rendering and prompts."""

import unittest
from unittest.mock import patch

import click

from gitcm.config.options import COMMIT_TYPES, LANGUAGE_OPTIONS, language_name
from gitcm.models import UserDecision
from gitcm.ui import (
    Console,
    PromptAborted,
    display_width,
    format_commit_type_option,
    format_language_option,
)


def test_option_formatting():
    assert format_commit_type_option(COMMIT_TYPES[0]) == "✨ feat     - A new feature"
    assert format_language_option(LANGUAGE_OPTIONS[1]) == "🇮🇩 Bahasa Indonesia"


def test_menus():
    assert len(COMMIT_TYPES) == 11
    assert [o.value for o in LANGUAGE_OPTIONS] == ["english", "indonesian"]
    assert language_name("indonesian") == "Bahasa Indonesia"
    assert language_name("klingon") == "klingon"


def test_box_renders_every_line(capsys):
    Console().box("Commit Statistic", "Files changed: 2\nInsertions: 13\nDeletions: 5", fg="blue")
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("┌─ Commit Statistic ")
    assert out[1].startswith("│ Files changed: 2")
    assert out[-1].startswith("└")
    assert len(out) == 5


def test_display_width():
    assert display_width("Commit") == 6
    assert display_width("✨") == 2
    assert display_width("Commit Statistic 📊") == 19


def test_box_borders_align_with_emoji_title(capsys):
    Console().box("Generated Commit Message ✨", "feat: add login\n\nWhat:\n- form")
    out = capsys.readouterr().out.splitlines()
    widths = {display_width(line) for line in out}
    assert len(widths) == 1


def test_error_goes_to_stderr(capsys):
    Console().error("Failed to create commit", "nothing to commit")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "✗ Failed to create commit: nothing to commit" in captured.err


def test_error_without_detail(capsys):
    Console().error("Not a git repository", "")
    assert capsys.readouterr().err.strip() == "✗ Not a git repository"


class TestPrompts(unittest.TestCase):
    @patch("gitcm.ui.click.prompt", return_value=2)
    def test_select_returns_value(self, mock_prompt):
        self.assertEqual(Console().select("Select commit type:", COMMIT_TYPES), "fix")
        kwargs = mock_prompt.call_args[1]
        self.assertEqual(kwargs["default"], 1)

    @patch("gitcm.ui.click.prompt", side_effect=click.Abort())
    def test_select_abort(self, _mock_prompt):
        with self.assertRaises(PromptAborted):
            Console().select("Select language for commit message:", LANGUAGE_OPTIONS)

    def test_decide(self):
        for answer, expected in (("U", UserDecision.USE), ("E", UserDecision.EDIT), ("C", UserDecision.CANCEL)):
            with self.subTest(answer=answer):
                with patch("gitcm.ui.click.prompt", return_value=answer):
                    self.assertIs(Console().decide(), expected)

    @patch("gitcm.ui.click.prompt", side_effect=click.Abort())
    def test_decide_abort(self, _mock_prompt):
        with self.assertRaises(PromptAborted):
            Console().decide()


if __name__ == "__main__":
    unittest.main()
