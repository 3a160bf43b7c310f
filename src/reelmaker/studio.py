"""Client-side studio session: conversation, storyboard and video history."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import requests
from pydantic import ValidationError

from .config import config
from .errors import ReelMakerError
from .history import VideoHistory
from .models import Message, SavedVideo, Scene, Storyboard

logger = logging.getLogger(__name__)

GREETING = (
    "Hi there! I'm your AI video creation assistant. Tell me about the video you want "
    "to create, and I'll help you bring it to life. What kind of story or content "
    "would you like to create today?"
)
ERROR_REPLY = (
    "I'm sorry, I encountered an error while processing your request. Please try again."
)
SHOW_SCENE_PHRASES = ("show scene", "show me the scene", "view scene")
DEFAULT_CLIP_DURATION = 5


class StudioError(ReelMakerError):
    """A studio request to the API failed."""


class StudioSession:
    """In-memory state of one studio session.

    Holds the conversation transcript and the current storyboard, and talks
    to the API over HTTP. Generated videos are appended to a VideoHistory,
    each with its own copy of the scenes it was rendered from.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        platform: str = "tiktok",
        video_length: int = 30,
        history: Optional[VideoHistory] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 300.0,
    ) -> None:
        """Initialize the session.

        Args:
            api_url: Base URL of the API. Defaults to config.api_url.
            platform: Target platform sent with every chat turn.
            video_length: Target video length in seconds.
            history: Video history store. Opened from config if not provided.
            session: Optional requests session.
            timeout: HTTP timeout in seconds; renders can take minutes.
        """
        self._api_url = (api_url or config.api_url).rstrip("/")
        self.platform = platform
        self.video_length = video_length
        self._history = history if history is not None else VideoHistory()
        self._http = session or requests.Session()
        self._timeout = timeout
        self._messages: List[Message] = [Message(role="assistant", content=GREETING)]
        self._storyboard: List[Scene] = []

    @property
    def messages(self) -> List[Message]:
        """Return the conversation transcript."""
        return list(self._messages)

    @property
    def storyboard(self) -> List[Scene]:
        """Return the current storyboard scenes."""
        return list(self._storyboard)

    @property
    def history(self) -> VideoHistory:
        """Return the video history store."""
        return self._history

    def _post(self, path: str, payload: dict) -> dict:
        url = f"{self._api_url}{path}"
        try:
            response = self._http.post(url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise StudioError(f"Could not reach {url}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        if not response.ok:
            raise StudioError(
                data.get("error")
                or f"Request failed: {response.status_code} {response.reason}"
            )
        return data

    @staticmethod
    def _is_show_scene_request(prompt: str) -> bool:
        lowered = prompt.lower()
        return any(phrase in lowered for phrase in SHOW_SCENE_PHRASES)

    def send(self, prompt: str) -> Optional[Message]:
        """Send a user turn and record the assistant's reply.

        Requests to show the scenes are answered locally when a storyboard
        exists. Failures are recorded as an apology turn, not raised.

        Returns:
            The assistant message, or None when nothing was sent.
        """
        prompt = prompt.strip()
        if not prompt:
            return None

        self._messages.append(Message(role="user", content=prompt))

        if self._is_show_scene_request(prompt) and self._storyboard:
            return None

        payload = {
            "messages": [
                {"role": m.role, "content": m.content} for m in self._messages
            ],
            "platform": self.platform,
            "videoLength": self.video_length,
        }

        try:
            data = self._post("/api/chat", payload)
            scenes = [Scene.model_validate(s) for s in data.get("scenes") or []]
            reply = Message(
                role="assistant",
                content=data.get("response") or "",
                scenes=scenes or None,
                search_used=data.get("searchUsed"),
            )
        except (StudioError, ValidationError) as e:
            logger.error(f"Chat request failed: {e}")
            reply = Message(role="assistant", content=ERROR_REPLY)
            scenes = []

        self._messages.append(reply)
        if scenes:
            self._storyboard = scenes
        return reply

    def _index_of(self, scene_id: int) -> int:
        for index, scene in enumerate(self._storyboard):
            if scene.id == scene_id:
                return index
        raise KeyError(f"No scene with id {scene_id}")

    def edit_scene(
        self,
        scene_id: int,
        description: Optional[str] = None,
        visual_elements: Optional[Sequence[str]] = None,
    ) -> Scene:
        """Replace a scene's description and/or visual elements.

        Raises:
            KeyError: If the storyboard has no scene with that id.
        """
        index = self._index_of(scene_id)
        updates = {}
        if description is not None:
            updates["description"] = description
        if visual_elements is not None:
            updates["visual_elements"] = [e for e in visual_elements if e]
        scene = self._storyboard[index].model_copy(update=updates, deep=True)
        self._storyboard[index] = scene
        return scene

    def delete_scene(self, scene_id: int) -> bool:
        """Remove a scene from the storyboard."""
        try:
            index = self._index_of(scene_id)
        except KeyError:
            return False
        del self._storyboard[index]
        return True

    def _render(self, scenes: Sequence[Scene]) -> dict:
        data = self._post(
            "/api/generate-video",
            {"scenes": [scene.to_wire() for scene in scenes]},
        )
        if not data.get("success") or not data.get("videoUrl"):
            raise StudioError(data.get("error") or "Failed to generate video")
        return data

    def generate_scene_video(self, scene_id: int) -> SavedVideo:
        """Render one scene and save the clip to history.

        Raises:
            KeyError: If the storyboard has no scene with that id.
            StudioError: If rendering fails.
        """
        scene = self._storyboard[self._index_of(scene_id)]
        data = self._render([scene])
        video = SavedVideo(
            video_url=data["videoUrl"],
            thumbnail_url=data.get("thumbnailUrl"),
            title=f"Scene {scene.id} Video",
            description=scene.description,
            duration=data.get("duration") or DEFAULT_CLIP_DURATION,
            scenes=[scene.model_copy(deep=True)],
        )
        return self._history.add(video)

    def generate_storyboard_video(self) -> SavedVideo:
        """Render the storyboard and save the clip to history.

        The API renders only the first scene; the whole storyboard is kept
        as the video's scene snapshot.

        Raises:
            StudioError: If there is no storyboard or rendering fails.
        """
        if not self._storyboard:
            raise StudioError("No scenes available to generate video")

        data = self._render(self._storyboard)
        video = SavedVideo(
            video_url=data["videoUrl"],
            thumbnail_url=data.get("thumbnailUrl"),
            title=f"Complete Video ({len(self._storyboard)} scenes)",
            description=self._storyboard[0].description or "AI Generated Video",
            duration=data.get("duration") or DEFAULT_CLIP_DURATION,
            scenes=[scene.model_copy(deep=True) for scene in self._storyboard],
        )
        return self._history.add(video)

    def export_storyboard(self, path: Path, title: Optional[str] = None) -> Storyboard:
        """Save the current storyboard and settings to YAML."""
        storyboard = Storyboard(
            title=title or "Untitled storyboard",
            platform=self.platform,
            video_length=self.video_length,
            scenes=self.storyboard,
        )
        storyboard.to_yaml(path)
        logger.info(f"Storyboard saved to {path}")
        return storyboard

    def load_storyboard(self, path: Path) -> Storyboard:
        """Replace the current storyboard and settings from YAML."""
        storyboard = Storyboard.from_yaml(path)
        self.platform = storyboard.platform
        self.video_length = storyboard.video_length
        self._storyboard = list(storyboard.scenes)
        logger.info(f"Loaded {len(storyboard.scenes)} scenes from {path}")
        return storyboard
