import json
import unittest
from unittest.mock import Mock, patch

import requests

from gitcm.config.loader import DEFAULT_CONFIG, ConfigError, MissingCredentialError
from gitcm.llm.chat_client import ChatCompletionClient, LLMError


def _response(status_code=200, body=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.text = text or json.dumps(body)
    response.json.return_value = body
    return response


def _client(**overrides):
    params = dict(
        base_url="https://api.example.com/",
        api_key="secret",
        model="deepseek-coder",
        request_timeout=12,
        max_tokens=256,
        temperature=0.5,
    )
    params.update(overrides)
    return ChatCompletionClient(**params)


MESSAGES = [
    {"role": "system", "content": "be terse"},
    {"role": "user", "content": "diff"},
]


class TestChatCompletionClient(unittest.TestCase):
    @patch("gitcm.llm.chat_client.requests.post")
    def test_complete_success(self, mock_post):
        mock_post.return_value = _response(body={
            "choices": [{"message": {"role": "assistant", "content": "  feat: add x\n\nWhat:\n- x\n"}}]
        })

        result = _client().complete(MESSAGES)

        self.assertEqual(result, "feat: add x\n\nWhat:\n- x")
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "https://api.example.com/chat/completions")
        self.assertEqual(kwargs["timeout"], 12)
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer secret")
        payload = kwargs["json"]
        self.assertEqual(payload["model"], "deepseek-coder")
        self.assertEqual(payload["messages"], MESSAGES)
        self.assertEqual(payload["max_tokens"], 256)
        self.assertEqual(payload["temperature"], 0.5)

    @patch("gitcm.llm.chat_client.requests.post")
    def test_complete_without_max_tokens(self, mock_post):
        mock_post.return_value = _response(body={"choices": [{"message": {"content": "ok"}}]})
        _client(max_tokens=None).complete(MESSAGES)
        self.assertNotIn("max_tokens", mock_post.call_args[1]["json"])

    @patch("gitcm.llm.chat_client.requests.post")
    def test_complete_null_content(self, mock_post):
        mock_post.return_value = _response(body={"choices": [{"message": {"content": None}}]})
        self.assertEqual(_client().complete(MESSAGES), "")

    @patch("gitcm.llm.chat_client.requests.post")
    def test_complete_error_status(self, mock_post):
        mock_post.return_value = _response(status_code=401, text="Unauthorized")
        with self.assertRaises(LLMError) as ctx:
            _client().complete(MESSAGES)
        self.assertIn("401", str(ctx.exception))

    @patch("gitcm.llm.chat_client.requests.post")
    def test_complete_connection_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(LLMError) as ctx:
            _client().complete(MESSAGES)
        self.assertIn("connection refused", str(ctx.exception))

    @patch("gitcm.llm.chat_client.requests.post")
    def test_complete_invalid_json(self, mock_post):
        response = _response(text="<html>")
        response.json.side_effect = json.JSONDecodeError("msg", "doc", 0)
        mock_post.return_value = response
        with self.assertRaises(LLMError):
            _client().complete(MESSAGES)

    @patch("gitcm.llm.chat_client.requests.post")
    def test_complete_unexpected_structure(self, mock_post):
        for body in ({"choices": []}, {"error": "nope"}, {"choices": [{"text": "x"}]}):
            with self.subTest(body=body):
                mock_post.return_value = _response(body=body)
                with self.assertRaises(LLMError) as ctx:
                    _client().complete(MESSAGES)
                self.assertIn("Unexpected response structure", str(ctx.exception))

    def test_empty_api_key_rejected(self):
        with self.assertRaises(MissingCredentialError):
            _client(api_key="")

    def test_api_key_not_in_repr(self):
        self.assertNotIn("secret", repr(_client()))


class TestFromConfig(unittest.TestCase):
    def test_from_config_reads_credential(self):
        client = ChatCompletionClient.from_config(DEFAULT_CONFIG, {"DEEPSEEK_API_KEY": "k-123"})
        self.assertEqual(client.api_key, "k-123")
        self.assertEqual(client.base_url, "https://api.deepseek.com")
        self.assertEqual(client.model, "deepseek-coder")
        self.assertEqual(client.max_tokens, 1000)
        self.assertEqual(client.temperature, 0.5)
        self.assertEqual(client.request_timeout, 60.0)

    def test_from_config_custom_variable(self):
        config = dict(DEFAULT_CONFIG, api_key_env="OPENAI_API_KEY")
        client = ChatCompletionClient.from_config(config, {"OPENAI_API_KEY": "sk-1"})
        self.assertEqual(client.api_key, "sk-1")

    def test_from_config_missing_credential(self):
        with self.assertRaises(ConfigError) as ctx:
            ChatCompletionClient.from_config(DEFAULT_CONFIG, {})
        self.assertIsInstance(ctx.exception, MissingCredentialError)
        self.assertIn("DEEPSEEK_API_KEY", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
