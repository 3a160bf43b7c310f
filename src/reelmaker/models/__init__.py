"""Data models for the video creator."""

from .scene import Scene
from .message import Message
from .storyboard import Storyboard
from .video import SavedVideo
from .search import SearchResult

__all__ = ["Scene", "Message", "Storyboard", "SavedVideo", "SearchResult"]
