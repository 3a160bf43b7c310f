"""Tests for the storyboard chat agent."""

import pytest

from reelmaker.agents import ChatTurnInput, StoryboardAgent
from reelmaker.agents.storyboard import DEFAULT_REPLY, SEARCH_NOTE
from reelmaker.errors import ProviderError
from reelmaker.models import Message, SearchResult
from reelmaker.prompts import SEARCH_UNAVAILABLE


def _turn(*contents, platform="tiktok", video_length=15):
    roles = ["user", "assistant"]
    messages = [
        Message(role=roles[i % 2], content=content)
        for i, content in enumerate(contents)
    ]
    return ChatTurnInput(messages=messages, platform=platform, video_length=video_length)


class TestStoryboardAgent:
    """One chat turn end to end with stubbed providers."""

    def test_sunrise_hike_produces_three_scenes(self, llm_client, search_client):
        agent = StoryboardAgent(client=llm_client, search_client=search_client)

        result = agent.run(_turn("Make a 15s TikTok about a sunrise hike"))

        assert len(result.scenes) == 3
        assert [s.id for s in result.scenes] == [1, 2, 3]
        assert result.search_used is False
        assert "```" not in result.response
        search_client.search.assert_not_called()
        llm_client.create_chat.assert_called_once()

    def test_system_prompt_carries_settings(self, llm_client, search_client):
        agent = StoryboardAgent(client=llm_client, search_client=search_client)

        agent.run(_turn("A cooking reel", platform="instagram-reels", video_length=45))

        system = llm_client.create_chat.call_args.kwargs["system"]
        assert "instagram-reels" in system
        assert "45 seconds" in system

    def test_prior_turns_are_forwarded(self, llm_client, search_client):
        agent = StoryboardAgent(client=llm_client, search_client=search_client)

        agent.run(_turn("Idea one", "Nice idea!", "Make it funnier"))

        messages = llm_client.create_chat.call_args.args[0]
        assert messages == [
            {"role": "user", "content": "Idea one"},
            {"role": "assistant", "content": "Nice idea!"},
            {"role": "user", "content": "Make it funnier"},
        ]

    def test_search_grounds_trending_queries(self, llm_client, search_client):
        search_client.search.return_value = [
            SearchResult(title="Dance craze", link="https://e.com", snippet="Everyone is doing it", position=1),
        ]
        agent = StoryboardAgent(client=llm_client, search_client=search_client)

        result = agent.run(_turn("What's trending today?"))

        search_client.search.assert_called_once_with("What's trending today?")
        system = llm_client.create_chat.call_args.kwargs["system"]
        assert "[Dance craze] Everyone is doing it" in system
        assert result.search_used is True
        assert result.response.endswith(SEARCH_NOTE)

    def test_search_failure_does_not_abort_turn(self, llm_client, search_client):
        search_client.search.side_effect = ProviderError("serper", "Search API returned 503")
        agent = StoryboardAgent(client=llm_client, search_client=search_client)

        result = agent.run(_turn("latest sneaker drops"))

        system = llm_client.create_chat.call_args.kwargs["system"]
        assert SEARCH_UNAVAILABLE in system
        assert result.search_used is True
        assert len(result.scenes) == 3

    def test_missing_search_key_is_a_search_failure(self, llm_client, monkeypatch):
        from reelmaker.config import config

        monkeypatch.setattr(config, "serper_api_key", "")
        agent = StoryboardAgent(client=llm_client)

        result = agent.run(_turn("news about the marathon"))

        assert SEARCH_UNAVAILABLE in llm_client.create_chat.call_args.kwargs["system"]
        assert result.search_used is True

    def test_reply_that_is_only_json_gets_default_text(self, llm_client, search_client):
        llm_client.create_chat.return_value = '```json\n{"scenes": [{"id": 1, "description": "A"}]}\n```'
        agent = StoryboardAgent(client=llm_client, search_client=search_client)

        result = agent.run(_turn("A short idea"))

        assert result.response == DEFAULT_REPLY
        assert len(result.scenes) == 1

    def test_reply_without_scenes(self, llm_client, search_client):
        llm_client.create_chat.return_value = "Which platform is this for?"
        agent = StoryboardAgent(client=llm_client, search_client=search_client)

        result = agent.run(_turn("Help me"))

        assert result.scenes == []
        assert result.response == "Which platform is this for?"

    def test_provider_error_propagates(self, llm_client, search_client):
        llm_client.create_chat.side_effect = ProviderError("anthropic", "overloaded")
        agent = StoryboardAgent(client=llm_client, search_client=search_client)

        with pytest.raises(ProviderError):
            agent.run(_turn("A short idea"))

    def test_empty_transcript_is_rejected(self, llm_client, search_client):
        agent = StoryboardAgent(client=llm_client, search_client=search_client)

        with pytest.raises(ValueError):
            agent.run(ChatTurnInput(messages=[]))

        llm_client.create_chat.assert_not_called()
