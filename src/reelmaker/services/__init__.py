"""External service integrations."""

from .anthropic import AnthropicClient
from .fal import FalVideoClient
from .search import SerperClient

__all__ = [
    "AnthropicClient",
    "FalVideoClient",
    "SerperClient",
]
