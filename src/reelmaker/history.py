"""Locally persisted history of generated videos."""

import json
import logging
import math
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import ValidationError

from .config import config
from .models import SavedVideo

logger = logging.getLogger(__name__)

STORAGE_KEY = "savedVideos"
PAGE_SIZE = 6


class VideoHistory:
    """Saved video list stored as one JSON array under a single key.

    The file is read once when the history is opened and rewritten in full
    on every change. There is no locking: two processes sharing a file can
    overwrite each other's changes.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        """Open the history.

        Args:
            path: JSON file to use. Defaults to config.history_path.
        """
        self._path = Path(path) if path else config.history_path
        self._videos: List[SavedVideo] = self._load()

    @property
    def path(self) -> Path:
        """Return the backing file path."""
        return self._path

    @property
    def videos(self) -> List[SavedVideo]:
        """Return a copy of the saved videos, oldest first."""
        return list(self._videos)

    def __len__(self) -> int:
        return len(self._videos)

    def __iter__(self) -> Iterator[SavedVideo]:
        return iter(list(self._videos))

    def _load(self) -> List[SavedVideo]:
        if not self._path.exists():
            return []

        try:
            data = json.loads(self._path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read video history {self._path}: {e}")
            return []

        records = data.get(STORAGE_KEY) if isinstance(data, dict) else None
        if not isinstance(records, list):
            return []

        videos: List[SavedVideo] = []
        for record in records:
            try:
                video = SavedVideo.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping invalid history record: {e}")
                continue
            if video.deleted:
                continue
            videos.append(video)

        logger.debug(f"Loaded {len(videos)} videos from {self._path}")
        return videos

    def _write(self, videos: List[SavedVideo]) -> None:
        """Rewrite the file with ``videos``."""
        payload = {
            STORAGE_KEY: [
                video.model_dump(mode="json", by_alias=True, exclude_none=True)
                for video in videos
            ]
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        tmp_path.write_text(json.dumps(payload, indent=2))
        tmp_path.replace(self._path)

    def add(self, video: SavedVideo) -> SavedVideo:
        """Append a video and persist the list.

        Raises:
            OSError: If the file cannot be written; the history is unchanged.
        """
        videos = self._videos + [video]
        self._write(videos)
        self._videos = videos
        logger.info(f"Saved video '{video.title}' to history")
        return video

    def get(self, video_id: str) -> Optional[SavedVideo]:
        """Return the video with the given id, if any."""
        return next((v for v in self._videos if v.id == video_id), None)

    def delete(self, video_id: str) -> bool:
        """Remove a video and persist the list.

        Returns:
            True if a video was removed.
        """
        remaining = [v for v in self._videos if v.id != video_id]
        if len(remaining) == len(self._videos):
            return False
        self._write(remaining)
        self._videos = remaining
        logger.info(f"Deleted video {video_id} from history")
        return True

    def page_count(self, size: int = PAGE_SIZE) -> int:
        """Return the number of pages of ``size`` videos."""
        return math.ceil(len(self._videos) / size)

    def page(self, number: int, size: int = PAGE_SIZE) -> List[SavedVideo]:
        """Return the zero-based page ``number`` of ``size`` videos."""
        if number < 0:
            raise ValueError("Page number must be non-negative")
        start = number * size
        return self._videos[start:start + size]
