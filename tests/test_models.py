"""Tests for data models and configuration."""

import pytest
from pydantic import ValidationError

from reelmaker.config import Config
from reelmaker.errors import ConfigurationError, ErrorCategory, categorize_error
from reelmaker.models import Message, Scene, Storyboard


class TestScene:
    """Scene validation and wire format."""

    def test_camel_case_input(self):
        scene = Scene.model_validate({"id": 2, "description": "A", "visualElements": ["x"]})

        assert scene.visual_elements == ["x"]
        assert scene.duration == "5 seconds"

    @pytest.mark.parametrize("value, expected", [(3, "3 seconds"), (2.5, "2.5 seconds"), (True, "5 seconds")])
    def test_numeric_duration(self, value, expected):
        assert Scene(id=1, description="A", duration=value).duration == expected

    def test_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            Scene(id=0, description="A")


class TestMessage:
    """Transcript turns."""

    def test_only_user_and_assistant_roles(self):
        with pytest.raises(ValidationError):
            Message(role="system", content="x")


class TestStoryboard:
    """Storyboard files."""

    def test_yaml_uses_wire_names(self, tmp_path):
        path = tmp_path / "nested" / "board.yaml"
        board = Storyboard(video_length=15, scenes=[Scene(id=1, description="A", visual_elements=["x"])])

        board.to_yaml(path)

        text = path.read_text()
        assert "videoLength: 15" in text
        assert "visualElements" in text
        assert Storyboard.from_yaml(path) == board


class TestConfig:
    """Environment-driven configuration."""

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FAL_KEY", "fal-secret")
        monkeypatch.setenv("REELMAKER_VIDEO_MODEL", "fal-ai/other")
        monkeypatch.setenv("REELMAKER_HISTORY_PATH", str(tmp_path / "h.json"))

        cfg = Config()

        assert cfg.fal_api_key == "fal-secret"
        assert cfg.video_model == "fal-ai/other"
        assert cfg.history_path == tmp_path / "h.json"

    def test_validation_raises_for_missing_keys(self):
        cfg = Config(anthropic_api_key="", fal_api_key="", serper_api_key="")

        with pytest.raises(ConfigurationError):
            cfg.validate_required()
        with pytest.raises(ConfigurationError):
            cfg.validate_video_required()
        with pytest.raises(ConfigurationError):
            cfg.validate_search_required()

    def test_validation_passes_when_set(self):
        Config(anthropic_api_key="a", fal_api_key="b", serper_api_key="c").validate_video_required()


class TestCategorizeError:
    """Provider error text classification."""

    def test_first_match_wins(self):
        assert categorize_error("404 after 400 retry") == ErrorCategory.NOT_FOUND
