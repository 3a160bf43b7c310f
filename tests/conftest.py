"""Shared test fixtures for reel-maker."""

from unittest.mock import MagicMock

import pytest

from reelmaker.config import config
from reelmaker.services.anthropic import AnthropicClient
from reelmaker.services.fal import FalVideoClient
from reelmaker.services.search import SerperClient


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Ensure tests never hit real providers or the user's history file."""
    monkeypatch.setattr(config, "anthropic_api_key", "test-key-not-real")
    monkeypatch.setattr(config, "fal_api_key", "test-key-not-real")
    monkeypatch.setattr(config, "serper_api_key", "test-key-not-real")
    monkeypatch.setattr(config, "history_path", tmp_path / "history.json")


SUNRISE_REPLY = """What a great idea! Here's a storyboard for your sunrise hike TikTok.

```json
{
  "scenes": [
    {
      "id": 1,
      "description": "Headlamps bob up a dark switchback trail as the sky turns indigo.",
      "duration": "5 seconds",
      "visualElements": ["Text overlay: '4:45 AM'", "Handheld POV", "Cool blue grade"]
    },
    {
      "id": 2,
      "description": "The hikers crest the ridge and the first light spills over the peaks.",
      "duration": "5 seconds",
      "visualElements": ["Drone reveal", "Lens flare"]
    },
    {
      "id": 3,
      "description": "Close-up of steaming coffee with the full sunrise behind it.",
      "duration": "5 seconds",
      "visualElements": ["Slow motion", "Text overlay: 'Worth it'"]
    }
  ]
}
```

Let me know if you want to tweak any scene!"""


@pytest.fixture
def sunrise_reply() -> str:
    """A model reply carrying a fenced three-scene storyboard."""
    return SUNRISE_REPLY


@pytest.fixture
def llm_client(sunrise_reply):
    """A stubbed AnthropicClient answering with the sunrise storyboard."""
    client = MagicMock(spec=AnthropicClient)
    client.model = "claude-test"
    client.create_chat.return_value = sunrise_reply
    return client


@pytest.fixture
def search_client():
    """A stubbed SerperClient."""
    return MagicMock(spec=SerperClient)


@pytest.fixture
def video_client():
    """A stubbed FalVideoClient returning a video.url payload."""
    client = MagicMock(spec=FalVideoClient)
    client.application = "fal-ai/veo2"
    client.generate.return_value = {
        "video": {"url": "https://cdn.example.com/clip.mp4"},
        "thumbnail": {"url": "https://cdn.example.com/clip.jpg"},
    }
    return client
