"""Storyboard agent: one chat turn that may propose scenes."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models import Message, Scene
from ..extraction import extract_scenes, normalize_scenes
from ..prompts import (
    SEARCH_UNAVAILABLE,
    build_system_prompt,
    format_search_results,
    should_use_search,
)
from ..services.anthropic import AnthropicClient
from ..services.search import SerperClient
from .base import BaseAgent

logger = logging.getLogger(__name__)

DEFAULT_REPLY = "I've created some scenes for your video idea!"
SEARCH_NOTE = "\n\n(I used search to find the latest information for your request.)"


@dataclass
class ChatTurnInput:
    """Input data for one storyboard chat turn."""

    messages: list[Message]
    platform: str = "tiktok"
    video_length: int = 30


@dataclass
class ChatTurnResult:
    """Reply text and scenes produced by one chat turn."""

    response: str
    scenes: list[Scene] = field(default_factory=list)
    search_used: bool = False


class StoryboardAgent(BaseAgent[ChatTurnInput, ChatTurnResult]):
    """Agent that answers a video idea and drafts a storyboard.

    The latest message is the active query. Time-sensitive queries are
    grounded with web search results before the model is called.
    """

    def __init__(
        self,
        client: Optional[AnthropicClient] = None,
        model: Optional[str] = None,
        search_client: Optional[SerperClient] = None,
    ) -> None:
        """Initialize the agent.

        Args:
            client: AnthropicClient instance. Created if not provided.
            model: Model to use. Defaults to config.default_model.
            search_client: SerperClient instance. Created on first search if
                not provided.
        """
        super().__init__(client=client, model=model)
        self._search_client = search_client

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "StoryboardAgent"

    def run(self, input_data: ChatTurnInput) -> ChatTurnResult:
        """Run one chat turn.

        Args:
            input_data: Transcript and video settings.

        Returns:
            ChatTurnResult with cleaned reply text and normalized scenes.

        Raises:
            ValueError: If the transcript is empty.
            ProviderError: If the language model call fails.
        """
        if not input_data.messages:
            raise ValueError("Invalid messages format")

        query = input_data.messages[-1].content
        use_search = should_use_search(query)
        search_context = self._search(query) if use_search else None

        system = build_system_prompt(
            input_data.platform,
            input_data.video_length,
            search_context,
        )

        history = [
            {"role": message.role, "content": message.content}
            for message in input_data.messages[:-1]
        ]
        history.append({"role": "user", "content": query})

        self._logger.info(
            f"Chat turn for {input_data.platform} ({input_data.video_length}s), "
            f"search={'on' if use_search else 'off'}"
        )
        reply = self._create_message(history, system=system)

        extraction = extract_scenes(reply)
        scenes = normalize_scenes(extraction.scenes)

        response = extraction.cleaned_text or DEFAULT_REPLY
        if use_search:
            response += SEARCH_NOTE

        self._logger.info(f"Turn produced {len(scenes)} scenes")
        return ChatTurnResult(response=response, scenes=scenes, search_used=use_search)

    def _search(self, query: str) -> str:
        """Return formatted search context, or a neutral note on any failure."""
        self._logger.info(f"Performing search for query: {query[:80]}")
        try:
            client = self._search_client or SerperClient()
            self._search_client = client
            return format_search_results(client.search(query))
        except Exception as e:
            self._logger.error(f"Search error: {e}")
            return SEARCH_UNAVAILABLE
