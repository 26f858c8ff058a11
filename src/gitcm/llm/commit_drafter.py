"""
Commit message drafting using a chat-completion model.

:class:`CommitDrafter` turns a staged diff, a Conventional Commit type
and a language into a :class:`~gitcm.models.CommitDraft`. It truncates
oversized diffs, composes a system/user prompt pair in the requested
language, sends it through a :class:`ChatCompletionClient` and splits
the reply into a title line and a description.

The expected reply looks like::

    feat: short subject line

    What:
    - ...
    Why:
    - ...
"""

from __future__ import annotations

import logging
import re
from textwrap import dedent
from typing import Dict, List

from gitcm.llm.chat_client import ChatCompletionClient, LLMError
from gitcm.models import CommitDraft


logger = logging.getLogger(__name__)

DEFAULT_MAX_DIFF_LENGTH = 10000
TRUNCATION_MARKER = "... [truncated]"


class DraftGenerationFailed(Exception):
    """Raised when no commit draft could be produced."""

    pass


def truncate_diff(diff: str, max_length: int = DEFAULT_MAX_DIFF_LENGTH) -> str:
    """Cut ``diff`` to ``max_length`` characters and mark the cut."""
    if len(diff) <= max_length:
        return diff
    return diff[:max_length] + TRUNCATION_MARKER


def parse_draft(reply: str) -> CommitDraft:
    """Split a model reply into title and body.

    The first line is the title. Everything after the first run of
    newlines is the body, stripped; a single-line reply has no body.

    Raises
    ------
    DraftGenerationFailed
        If the reply is empty.
    """
    content = reply.strip()
    if not content:
        raise DraftGenerationFailed("Empty response from chat service")
    first = re.split(r"\n+", content, maxsplit=1)[0]
    title = first.strip()
    body = content[len(first):].strip()
    return CommitDraft(title=title, body=body)


def _english_prompts(diff: str, commit_type: str) -> List[str]:
    system = dedent(
        f"""
        You are a Git commit message generator that follows the conventional commits specification.
        Generate a concise, clear commit message based on the git diff provided.
        The commit type will be '{commit_type}'.
        Follow these guidelines:
        1. Start with ONE brief subject line (max 72 chars), this is the commit message
        2. Include a separate description with two sections:
           - What: Describe the changes made
           - Why: Explain the reason for the changes
        3. Focus on the purpose and impact of the changes
        4. Format the response as:
           {commit_type}: commit message

           What:
           Why:
        5. Keep the message professional and technical
        """
    ).strip()
    user = (
        f"Here's the git diff for my staged changes:\n\n{diff}\n\n"
        f"Generate a conventional commit message with type '{commit_type}'. "
        "Clearly separate the commit message (one line) and the description."
    )
    return [system, user]


def _indonesian_prompts(diff: str, commit_type: str) -> List[str]:
    system = dedent(
        f"""
        Kamu adalah generator pesan commit Git yang mengikuti spesifikasi conventional commits.
        Hasilkan pesan commit yang jelas dan ringkas berdasarkan git diff yang diberikan.
        Tipe commit akan berupa '{commit_type}'.
        Ikuti pedoman berikut:
        1. Mulai dengan SATU baris judul singkat (maksimum 72 karakter), ini adalah pesan commit
        2. Sertakan deskripsi terpisah dengan dua bagian:
           - Perubahan: Jelaskan perubahan yang dilakukan
           - Alasan Perubahan: Jelaskan alasan perubahan
        3. Fokus pada tujuan dan dampak perubahan
        4. Format respons sebagai:
           {commit_type}: pesan commit

           Perubahan:
           Alasan Perubahan:
        5. Jaga agar pesan tetap profesional dan teknis
        """
    ).strip()
    user = (
        f"Ini adalah git diff untuk perubahan yang di-staged:\n\n{diff}\n\n"
        f"Hasilkan pesan commit konvensional dengan tipe '{commit_type}'. "
        "Pisahkan dengan jelas antara pesan commit (satu baris) dan deskripsi (format markdown)."
    )
    return [system, user]


_PROMPT_BUILDERS = {
    "english": _english_prompts,
    "indonesian": _indonesian_prompts,
}


class CommitDrafter:
    """Draft a commit message for a diff with a chat-completion model."""

    def __init__(
        self,
        client: ChatCompletionClient,
        max_diff_length: int = DEFAULT_MAX_DIFF_LENGTH,
    ) -> None:
        self.client = client
        self.max_diff_length = max_diff_length

    def build_messages(self, diff: str, commit_type: str, language: str) -> List[Dict[str, str]]:
        """Compose the system and user messages for ``language``.

        Unknown languages fall back to English. The diff is truncated to
        :attr:`max_diff_length` first.
        """
        builder = _PROMPT_BUILDERS.get(language, _english_prompts)
        system, user = builder(truncate_diff(diff, self.max_diff_length), commit_type)
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]

    def generate(self, diff: str, commit_type: str, language: str) -> CommitDraft:
        """Return a :class:`CommitDraft` for ``diff``.

        Raises
        ------
        DraftGenerationFailed
            If the service call fails or the reply is empty.
        """
        if len(diff) > self.max_diff_length:
            logger.info(
                "Diff is %d characters; sending the first %d", len(diff), self.max_diff_length
            )
        messages = self.build_messages(diff, commit_type, language)
        try:
            reply = self.client.complete(messages)
        except LLMError as exc:
            raise DraftGenerationFailed(str(exc)) from exc
        draft = parse_draft(reply)
        logger.debug("Drafted commit title: %s", draft.title)
        return draft
