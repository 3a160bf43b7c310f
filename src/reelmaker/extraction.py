"""Scene extraction from free-form language model replies.

The model is asked to answer with prose plus a fenced ``json`` block holding
``{"scenes": [...]}``. It does not always comply, so extraction is tolerant:
a missing or malformed block yields no scenes rather than an error, and the
visible reply is always scrubbed of raw scene JSON.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple

from .models import Scene
from .models.scene import DEFAULT_DURATION

logger = logging.getLogger(__name__)

FENCED_JSON_PATTERN = re.compile(r"```json\s*(\{[\s\S]*?\})\s*```")
FENCED_BLOCK_PATTERN = re.compile(r"```json[\s\S]*?```")
LOOSE_SCENES_PATTERN = re.compile(r'\{[\s\S]*"scenes"[\s\S]*?\}')

DEFAULT_DESCRIPTION = "No description provided."


@dataclass
class ExtractionResult:
    """Scenes found in a reply and the reply with the scene JSON removed."""

    scenes: List[dict] = field(default_factory=list)
    cleaned_text: str = ""


def _find_scene_object(text: str) -> Optional[Tuple[int, int, dict]]:
    """Locate the first JSON object in ``text`` that carries a "scenes" key.

    Returns:
        ``(start, end, object)`` or None.
    """
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            obj, end = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            obj = None
        if isinstance(obj, dict) and "scenes" in obj:
            return start, end, obj
        start = text.find("{", start + 1)
    return None


def _clean_text(text: str) -> str:
    cleaned = FENCED_BLOCK_PATTERN.sub("", text)

    located = _find_scene_object(cleaned)
    if located:
        start, end, _ = located
        cleaned = cleaned[:start] + cleaned[end:]

    cleaned = LOOSE_SCENES_PATTERN.sub("", cleaned)
    return cleaned.strip()


def extract_scenes(text: str) -> ExtractionResult:
    """Extract the raw scene list embedded in a model reply.

    Args:
        text: Raw reply from the language model.

    Returns:
        ExtractionResult with the raw (unvalidated) scene dicts, possibly
        empty, and the cleaned reply text.
    """
    if not isinstance(text, str):
        text = ""

    data: Any = None
    fenced = FENCED_JSON_PATTERN.search(text)
    candidate = fenced.group(1) if fenced else None

    if candidate is None:
        located = _find_scene_object(text)
        if located:
            data = located[2]
        else:
            loose = LOOSE_SCENES_PATTERN.search(text)
            candidate = loose.group(0) if loose else None

    if candidate is not None:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse scenes JSON: {e}")
            logger.debug(f"Rejected candidate: {candidate}")
    elif data is None:
        logger.debug("No scenes JSON found in response")

    scenes: List[dict] = []
    if isinstance(data, dict) and isinstance(data.get("scenes"), list):
        scenes = data["scenes"]
        logger.info(f"Extracted {len(scenes)} scenes from response")

    return ExtractionResult(scenes=scenes, cleaned_text=_clean_text(text))


def _coerce_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
        return number if number > 0 else None
    return None


def normalize_scenes(raw_scenes: Iterable[Any]) -> List[Scene]:
    """Turn raw parsed scenes into Scene models.

    Missing fields are backfilled: ``id`` with the 1-based list position,
    ``description`` and ``duration`` with placeholders, ``visualElements``
    with an empty list. If the resulting ids are not unique, every scene is
    renumbered 1..N in list order.
    """
    scenes: List[Scene] = []
    for position, raw in enumerate(raw_scenes, start=1):
        if not isinstance(raw, dict):
            logger.warning(f"Skipping scene {position}: expected an object, got {type(raw).__name__}")
            continue

        description = raw.get("description")
        if description is None or description == "":
            description = DEFAULT_DESCRIPTION

        duration = raw.get("duration")
        if duration is None or duration == "":
            duration = DEFAULT_DURATION
        elif not isinstance(duration, (str, int, float)):
            duration = str(duration)

        elements = raw.get("visualElements")
        if not isinstance(elements, list):
            elements = []

        scenes.append(Scene(
            id=_coerce_id(raw.get("id")) or position,
            description=str(description),
            duration=duration,
            visual_elements=[str(e) for e in elements if e is not None],
        ))

    ids = [scene.id for scene in scenes]
    if len(set(ids)) != len(ids):
        logger.warning(f"Duplicate scene ids {ids}; renumbering sequentially")
        for index, scene in enumerate(scenes, start=1):
            scene.id = index

    return scenes
