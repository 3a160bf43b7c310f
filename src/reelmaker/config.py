"""Configuration management."""

import os
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables
load_dotenv()


class Config(BaseModel):
    """Application configuration."""

    # API Keys
    anthropic_api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="Anthropic API key"
    )
    fal_api_key: str = Field(
        default_factory=lambda: os.getenv("FAL_KEY", ""),
        description="fal.ai API key (video generation)"
    )
    serper_api_key: str = Field(
        default_factory=lambda: os.getenv("SERPER_API_KEY", ""),
        description="Serper.dev API key (web search)"
    )

    # Paths
    history_path: Path = Field(
        default_factory=lambda: Path(
            os.getenv("REELMAKER_HISTORY_PATH", "~/.reelmaker/history.json")
        ).expanduser(),
        description="JSON file holding the saved video history"
    )

    # Model settings
    default_model: str = Field(
        default_factory=lambda: os.getenv("REELMAKER_MODEL", "claude-sonnet-4-20250514"),
        description="Default Claude model"
    )
    video_model: str = Field(
        default_factory=lambda: os.getenv("REELMAKER_VIDEO_MODEL", "fal-ai/veo2"),
        description="fal.ai text-to-video application"
    )

    # Client settings
    api_url: str = Field(
        default_factory=lambda: os.getenv("REELMAKER_API_URL", "http://localhost:8000"),
        description="Base URL of the reel-maker API used by the studio client"
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that the language model credential is set."""
        if not self.anthropic_api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY not set")

    def validate_video_required(self) -> None:
        """Validate that the video generation credential is set.

        Raises:
            ConfigurationError: If FAL_KEY is missing.
        """
        if not self.fal_api_key:
            raise ConfigurationError(
                "FAL_KEY not set. Set the environment variable or add it to your .env file."
            )

    def validate_search_required(self) -> None:
        """Validate that the web search credential is set."""
        if not self.serper_api_key:
            raise ConfigurationError(
                "SERPER_API_KEY not set. Web search is unavailable."
            )


# Global config instance
config = Config()
