"""Scene rendering through the text-to-video provider."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from .errors import classify_provider_error
from .models import Scene
from .prompts import build_video_prompt
from .services.fal import FalVideoClient

logger = logging.getLogger(__name__)

CLIP_DURATION = 5
MODEL_LIMITATION = "Each scene is limited to 5 seconds maximum due to AI model constraints."
NO_VIDEO_URL = "No video URL in response"


class ResponseShape(str, Enum):
    """Known layouts of a provider result payload."""

    VIDEO_OBJECT = "video.url"
    OUTPUT_OBJECT = "output.video"
    TOP_LEVEL_URL = "url"
    IMAGES_LIST = "images[]"
    VIDEO_STRING = "video"


@dataclass
class VideoAsset:
    """A decoded provider result."""

    shape: ResponseShape
    video_url: str
    thumbnail_url: Optional[str] = None


def _url_of(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    if isinstance(value, dict) and isinstance(value.get("url"), str) and value["url"]:
        return value["url"]
    return None


def _decode_video_object(data: dict) -> Optional[VideoAsset]:
    video = data.get("video")
    if isinstance(video, dict) and _url_of(video):
        return VideoAsset(ResponseShape.VIDEO_OBJECT, video["url"], _url_of(data.get("thumbnail")))
    return None


def _decode_output_object(data: dict) -> Optional[VideoAsset]:
    output = data.get("output")
    if isinstance(output, dict) and isinstance(output.get("video"), str) and output["video"]:
        return VideoAsset(ResponseShape.OUTPUT_OBJECT, output["video"], _url_of(output.get("thumbnail")))
    return None


def _decode_top_level_url(data: dict) -> Optional[VideoAsset]:
    url = data.get("url")
    if isinstance(url, str) and url:
        return VideoAsset(ResponseShape.TOP_LEVEL_URL, url)
    return None


def _decode_images_list(data: dict) -> Optional[VideoAsset]:
    images = data.get("images")
    if isinstance(images, list) and images:
        url = _url_of(images[0])
        if url:
            return VideoAsset(ResponseShape.IMAGES_LIST, url)
    return None


def _decode_video_string(data: dict) -> Optional[VideoAsset]:
    video = data.get("video")
    if isinstance(video, str) and video:
        return VideoAsset(ResponseShape.VIDEO_STRING, video)
    return None


# Tried in order; the first decoder that recognizes the payload wins.
DECODERS: tuple[Callable[[dict], Optional[VideoAsset]], ...] = (
    _decode_video_object,
    _decode_output_object,
    _decode_top_level_url,
    _decode_images_list,
    _decode_video_string,
)


def decode_video_response(data: Any) -> Optional[VideoAsset]:
    """Find the clip URL in a provider payload, or None if no shape matches."""
    if not isinstance(data, dict):
        return None
    for decoder in DECODERS:
        asset = decoder(data)
        if asset is not None:
            return asset
    return None


@dataclass
class VideoGenerationResult:
    """Outcome of one render request."""

    success: bool
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: int = CLIP_DURATION
    message: Optional[str] = None
    model_limitation: Optional[str] = None
    error: Optional[str] = None
    details: Any = None
    prompt: Optional[str] = None
    metadata: dict = field(default_factory=dict)


class VideoRenderer:
    """Renders a storyboard scene into a clip URL.

    Only the first scene of a request is rendered; clips are not stitched.
    Every call reaches the provider: nothing is cached and nothing is retried.
    """

    def __init__(self, client: Optional[FalVideoClient] = None) -> None:
        """Initialize the renderer.

        Args:
            client: FalVideoClient instance. Created if not provided, which
                raises ConfigurationError when FAL_KEY is missing.
        """
        self._client = client or FalVideoClient()

    def render(self, scenes: Sequence[Scene]) -> VideoGenerationResult:
        """Render the first scene of ``scenes``.

        Provider failures are returned as an unsuccessful result, never raised.

        Raises:
            ValueError: If ``scenes`` is empty.
        """
        if not scenes:
            raise ValueError("No valid scenes provided")

        scene = scenes[0]
        if len(scenes) > 1:
            logger.info(f"Rendering scene {scene.id} only; {len(scenes) - 1} more scenes ignored")

        prompt = build_video_prompt(scene)
        metadata = {"scene_id": scene.id, "application": self._client.application}

        try:
            data = self._client.generate(prompt)
        except Exception as e:
            details = str(e)
            logger.error(f"Video generation failed: {details}")
            return VideoGenerationResult(
                success=False,
                error=classify_provider_error(details),
                details=details,
                prompt=prompt,
                metadata=metadata,
            )

        asset = decode_video_response(data)
        if asset is None:
            logger.error(f"No video URL found in response data: {data}")
            return VideoGenerationResult(
                success=False,
                error=NO_VIDEO_URL,
                details=data,
                prompt=prompt,
                metadata=metadata,
            )

        logger.info(f"Video ready ({asset.shape.value}): {asset.video_url}")
        metadata["shape"] = asset.shape.value
        return VideoGenerationResult(
            success=True,
            video_url=asset.video_url,
            thumbnail_url=asset.thumbnail_url,
            duration=CLIP_DURATION,
            message=f"Video generated successfully using {self._client.application}",
            model_limitation=MODEL_LIMITATION,
            prompt=prompt,
            metadata=metadata,
        )
