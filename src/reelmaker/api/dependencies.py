"""Dependency providers for the API routes.

Routes receive factories rather than instances so request validation runs
before any provider client is built; a missing credential then surfaces as
a configuration error only for well-formed requests.
"""

from typing import Callable

from ..agents import StoryboardAgent
from ..config import Config, config
from ..rendering import VideoRenderer
from ..services.search import SerperClient


def get_config() -> Config:
    """Return the active configuration."""
    return config


def get_agent_factory() -> Callable[[], StoryboardAgent]:
    """Dependency providing a StoryboardAgent factory."""
    return StoryboardAgent


def get_renderer_factory() -> Callable[[], VideoRenderer]:
    """Dependency providing a VideoRenderer factory."""
    return VideoRenderer


def get_search_client_factory() -> Callable[[], SerperClient]:
    """Dependency providing a SerperClient factory."""
    return SerperClient
