"""Anthropic Claude API client wrapper."""

import logging
from typing import Optional, Sequence

from anthropic import Anthropic, APIError, APIConnectionError

from ..config import config
from ..errors import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class AnthropicClient:
    """Client wrapper for the Anthropic Claude messages API.

    Each call is a single non-streaming request. SDK-level retries are
    disabled; a failed turn is reported to the caller and the user resubmits.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        """Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY env var.
            model: Model to use. Defaults to config.default_model.
        """
        self._api_key = api_key or config.anthropic_api_key
        if not self._api_key:
            raise ConfigurationError(
                "Anthropic API key not provided. Set ANTHROPIC_API_KEY env var."
            )

        self._client = Anthropic(api_key=self._api_key, max_retries=0)
        self._model = model or config.default_model

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model

    @staticmethod
    def _prepare_messages(messages: Sequence[dict]) -> list[dict]:
        """Fit a transcript to the messages API turn rules.

        The API expects the conversation to open with a user turn and to
        alternate roles, so leading assistant turns (e.g. a UI greeting)
        are dropped and consecutive same-role turns are merged.
        """
        prepared: list[dict] = []
        for message in messages:
            role = message["role"]
            content = message["content"]
            if not prepared and role != "user":
                continue
            if prepared and prepared[-1]["role"] == role:
                prepared[-1]["content"] += f"\n\n{content}"
            else:
                prepared.append({"role": role, "content": content})
        return prepared

    def create_chat(
        self,
        messages: Sequence[dict],
        system: Optional[str] = None,
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> str:
        """Send a conversation to Claude and return the reply text.

        Args:
            messages: Ordered ``{"role", "content"}`` turns, last one from the user.
            system: Optional system prompt.
            max_tokens: Maximum tokens in the response.
            temperature: Sampling temperature (0.0-1.0).

        Returns:
            The text content of Claude's response.

        Raises:
            ProviderError: If the API request fails.
        """
        kwargs = {
            "model": self._model,
            "max_tokens": max_tokens,
            "messages": self._prepare_messages(messages),
            "temperature": temperature,
        }
        if system:
            kwargs["system"] = system

        logger.debug(f"Sending {len(kwargs['messages'])} turns to {self._model}")

        try:
            response = self._client.messages.create(**kwargs)
        except APIConnectionError as e:
            logger.error(f"Connection error: {e}")
            raise ProviderError("anthropic", str(e)) from e
        except APIError as e:
            logger.error(f"API error: {e}")
            raise ProviderError("anthropic", str(e)) from e

        # Extract text content from response
        parts = [block.text for block in response.content if hasattr(block, "text")]
        return "".join(parts)

