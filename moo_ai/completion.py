# Moo AI - Completion Backends
# The language model is an opaque prompt -> text call. Two ways to reach it:
# the Anthropic Messages API, or the mobile app's own backend relay.

import logging
import time

import anthropic
import requests

from moo_ai import config
from moo_ai.prompts import ASSISTANT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """The delegated call failed: transport error, timeout, bad status or bad body."""


class AnthropicCompleter:
    """Calls Claude through the anthropic SDK."""

    def __init__(self, client=None, model: str = None, max_tokens: int = None,
                 system: str = ASSISTANT_SYSTEM_PROMPT, timeout: float = None):
        self.model = model or config.CLAUDE_MODEL
        self.max_tokens = max_tokens or config.MAX_TOKENS
        self.system = system
        self.client = client or anthropic.Anthropic(
            api_key=config.ANTHROPIC_API_KEY,
            timeout=timeout or config.REQUEST_TIMEOUT,
            max_retries=1,
        )

    def complete(self, prompt: str, system: str = None) -> str:
        t0 = time.time()
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system or self.system,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise CompletionError(f"Anthropic API error: {e}") from e
        logger.debug("[TIMING] anthropic completion=%.2fs", time.time() - t0)

        text = "".join(
            block.text for block in (response.content or [])
            if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise CompletionError("Anthropic API returned no text")
        return text


class RelayCompleter:
    """
    Posts the prompt to the backend relay: POST {base_url}/chat with
    {"user_input": prompt}, expecting {"response": "..."} back.

    The relay owns its own model configuration, so `system` is ignored.
    """

    def __init__(self, base_url: str = None, timeout: float = None, session=None):
        self.base_url = (base_url or config.RELAY_URL).rstrip("/")
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def complete(self, prompt: str, system: str = None) -> str:
        t0 = time.time()
        try:
            resp = self.session.post(
                f"{self.base_url}/chat",
                json={"user_input": prompt},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise CompletionError(f"Relay request failed: {e}") from e
        except ValueError as e:
            raise CompletionError("Relay returned a non-JSON body") from e
        logger.debug("[TIMING] relay completion=%.2fs", time.time() - t0)

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise CompletionError("Relay response has no 'response' text")
        return text


def build_completer(backend: str = None):
    """Completer for the configured COMPLETION_BACKEND."""
    backend = (backend or config.COMPLETION_BACKEND).lower()
    if backend == "anthropic":
        return AnthropicCompleter()
    if backend == "relay":
        return RelayCompleter()
    raise ValueError(f"Unknown completion backend: {backend!r}")
