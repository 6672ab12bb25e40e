"""
neuronest/bots/features/completion_client/completion_client.py

Thin wrapper around the OpenAI chat completions API for the bot pipeline.

One call per bot invocation: the rendered prompt goes in as a single system
message, the service is asked for a JSON object, and the raw message text
comes back. There is no streaming, no function-calling and no retry; the
SDK's own retry loop is switched off so a failure surfaces immediately.

Usage:
  client = CompletionClient(api_key=settings.openai_api_key, model=settings.openai_model)
  raw = client.complete(prompt)
"""

import logging
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from neuronest.config import DEFAULT_MODEL, Settings
from neuronest.errors import CompletionFailure

logger = logging.getLogger(__name__)


class CompletionClient:
    """
    Sends a prompt to the completion service and returns the reply text.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize the CompletionClient.

        Args:
            api_key:  OpenAI API key. Required unless `client` is given.
            model:    Model identifier used for every call.
            timeout:  Per-request timeout in seconds; None keeps the SDK default.
            client:   Pre-built object exposing `chat.completions.create`
                      (used in place of a real OpenAI client).

        Raises:
            ValueError: If neither an API key nor a client is provided.
        """
        self.model = model
        if client is not None:
            self.client = client
            return

        if not api_key:
            raise ValueError("OpenAI API key must be provided (OPENAI_API_KEY).")

        kwargs = {"api_key": api_key, "max_retries": 0}
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = OpenAI(**kwargs)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.completion_timeout,
        )

    def complete(self, prompt: str) -> str:
        """
        Request a JSON-formatted completion for `prompt`.

        Returns:
            The raw message content.

        Raises:
            CompletionFailure: If the call fails or the reply is empty.
        """
        logger.info(f"Calling completion service (model={self.model})...")
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": prompt}],
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            logger.error(f"Completion request failed: {e}")
            raise CompletionFailure(f"Completion request failed: {e}") from e

        choices = getattr(resp, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            logger.error("Completion service returned an empty response.")
            raise CompletionFailure("Empty response from completion service")

        logger.debug(f"Completion content: {content}")
        return content
