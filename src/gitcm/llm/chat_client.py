"""
Client for an OpenAI-compatible chat-completion endpoint.

The client posts a list of role-tagged messages to
``<base_url>/chat/completions`` and returns the text of the first
choice. On error conditions (transport errors, timeouts, non-200
status, malformed bodies) a :class:`LLMError` is raised.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import requests

from gitcm.config.loader import MissingCredentialError


logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Raised when communication with the chat-completion service fails."""

    pass


@dataclass
class ChatCompletionClient:
    """Client for a hosted chat-completion service.

    Parameters
    ----------
    base_url : str
        Base URL of the service, e.g. ``"https://api.deepseek.com"``.
    api_key : str
        Bearer token sent with every request. Must not be empty.
    model : str
        Name of the model to use, e.g. ``"deepseek-coder"``.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. Defaults to 60 seconds.
    max_tokens : int, optional
        Upper bound on the length of the generated reply.
    temperature : float, optional
        Sampling temperature. Defaults to 0.5.
    """

    base_url: str
    api_key: str = field(repr=False)
    model: str
    request_timeout: float = 60.0
    max_tokens: Optional[int] = 1000
    temperature: float = 0.5

    def __post_init__(self) -> None:
        if not self.api_key:
            raise MissingCredentialError("API key")

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ChatCompletionClient":
        """Build a client from loaded settings and the environment.

        Raises
        ------
        MissingCredentialError
            If the variable named by ``config["api_key_env"]`` is unset.
        """
        env = os.environ if environ is None else environ
        key_variable = config["api_key_env"]
        api_key = env.get(key_variable)
        if not api_key:
            raise MissingCredentialError(key_variable)
        return cls(
            base_url=config["base_url"],
            api_key=api_key,
            model=config["model"],
            request_timeout=float(config["request_timeout"]),
            max_tokens=config.get("max_tokens"),
            temperature=float(config["temperature"]),
        )

    def _endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """Send ``messages`` and return the assistant's reply text.

        Parameters
        ----------
        messages : List[Dict[str, str]]
            Chat messages, each with ``role`` and ``content`` keys.

        Returns
        -------
        str
            The reply content with surrounding whitespace removed. May be
            empty if the model produced no text.

        Raises
        ------
        LLMError
            If the request fails or the service returns an error.
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "stream": False,
        }
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        url = self._endpoint()
        logger.debug("Sending chat request to %s with model %s", url, self.model)
        try:
            response = requests.post(
                url,
                json=payload,
                headers=headers,
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Failed to connect to chat service: %s", exc)
            raise LLMError(str(exc)) from exc
        if response.status_code != 200:
            logger.error(
                "Chat service returned non-200 status %s: %s", response.status_code, response.text
            )
            raise LLMError(f"Chat service returned status {response.status_code}: {response.text}")
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            logger.error("Failed to parse chat response: %s", exc)
            raise LLMError("Failed to parse chat response") from exc
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMError("Unexpected response structure from chat service") from exc
        return (content or "").strip()
