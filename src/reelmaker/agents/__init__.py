"""AI agents for content generation and planning."""

from .base import BaseAgent
from .storyboard import ChatTurnInput, ChatTurnResult, StoryboardAgent

__all__ = ["BaseAgent", "ChatTurnInput", "ChatTurnResult", "StoryboardAgent"]
