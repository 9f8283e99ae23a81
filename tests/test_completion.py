"""
Tests for the completion backends.
Run with: python -m pytest tests/test_completion.py -v
(The anthropic client and the requests session are mocked, nothing leaves the process.)
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import anthropic
import httpx
import pytest
import requests

from moo_ai.completion import (
    AnthropicCompleter,
    CompletionError,
    RelayCompleter,
    build_completer,
)
from moo_ai.prompts import ASSISTANT_SYSTEM_PROMPT, PERSONA_SYSTEM_PROMPT


def _message(*texts):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=t) for t in texts])


# ─────────────────────────────────────────────────────────────
# AnthropicCompleter
# ─────────────────────────────────────────────────────────────

class TestAnthropicCompleter:

    def test_returns_text(self):
        client = MagicMock()
        client.messages.create.return_value = _message("Gir cows come from Gujarat.")
        completer = AnthropicCompleter(client=client, model="test-model", max_tokens=256)

        assert completer.complete("## prompt") == "Gir cows come from Gujarat."
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 256
        assert kwargs["system"] == ASSISTANT_SYSTEM_PROMPT
        assert kwargs["messages"] == [{"role": "user", "content": "## prompt"}]

    def test_system_override(self):
        client = MagicMock()
        client.messages.create.return_value = _message("Moo.")
        AnthropicCompleter(client=client).complete("hi", system=PERSONA_SYSTEM_PROMPT)
        assert client.messages.create.call_args.kwargs["system"] == PERSONA_SYSTEM_PROMPT

    def test_joins_text_blocks(self):
        client = MagicMock()
        client.messages.create.return_value = _message("Part one. ", "Part two.")
        assert AnthropicCompleter(client=client).complete("p") == "Part one. Part two."

    def test_api_error_wrapped(self):
        client = MagicMock()
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client.messages.create.side_effect = anthropic.APIConnectionError(request=request)
        with pytest.raises(CompletionError):
            AnthropicCompleter(client=client).complete("p")

    def test_empty_response_is_error(self):
        client = MagicMock()
        client.messages.create.return_value = SimpleNamespace(content=[])
        with pytest.raises(CompletionError):
            AnthropicCompleter(client=client).complete("p")


# ─────────────────────────────────────────────────────────────
# RelayCompleter
# ─────────────────────────────────────────────────────────────

def _relay(response=None, post_error=None):
    session = MagicMock()
    if post_error is not None:
        session.post.side_effect = post_error
    else:
        session.post.return_value = response
    return RelayCompleter(base_url="http://relay.local/", timeout=5, session=session), session


def _response(payload=None, status_error=None, json_error=None):
    resp = MagicMock()
    resp.raise_for_status.side_effect = status_error
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


class TestRelayCompleter:

    def test_posts_user_input(self):
        completer, session = _relay(_response({"response": "Feed green fodder."}))
        assert completer.complete("## prompt") == "Feed green fodder."
        session.post.assert_called_once_with(
            "http://relay.local/chat", json={"user_input": "## prompt"}, timeout=5,
        )

    def test_connection_error(self):
        completer, _ = _relay(post_error=requests.ConnectionError("refused"))
        with pytest.raises(CompletionError):
            completer.complete("p")

    def test_timeout(self):
        completer, _ = _relay(post_error=requests.Timeout("slow"))
        with pytest.raises(CompletionError):
            completer.complete("p")

    def test_non_2xx(self):
        completer, _ = _relay(_response(status_error=requests.HTTPError("502 Bad Gateway")))
        with pytest.raises(CompletionError):
            completer.complete("p")

    def test_non_json_body(self):
        completer, _ = _relay(_response(json_error=ValueError("no json")))
        with pytest.raises(CompletionError):
            completer.complete("p")

    def test_missing_response_field(self):
        completer, _ = _relay(_response({"error": "nope"}))
        with pytest.raises(CompletionError):
            completer.complete("p")

    def test_blank_response_field(self):
        completer, _ = _relay(_response({"response": "   "}))
        with pytest.raises(CompletionError):
            completer.complete("p")


class TestBuildCompleter:

    def test_relay(self):
        assert isinstance(build_completer("relay"), RelayCompleter)

    def test_case_insensitive(self):
        assert isinstance(build_completer("RELAY"), RelayCompleter)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_completer("carrier-pigeon")
