"""Prompt construction for the storyboard chat and the video renderer."""

from typing import Optional, Sequence

from .models import Scene, SearchResult

SEARCH_TRIGGERS = (
    "latest",
    "trending",
    "current",
    "news",
    "recent",
    "popular",
    "viral",
    "2023",
    "2024",
    "2025",
    "today",
    "this week",
    "this month",
    "this year",
)

MAX_SEARCH_RESULTS = 5
NO_SEARCH_RESULTS = "No relevant search results found."
SEARCH_UNAVAILABLE = "Unable to perform search at this time."

MAX_VIDEO_PROMPT_LENGTH = 200
MAX_VISUAL_ELEMENTS = 3

SCENE_FORMAT_TEMPLATE = """Format each scene as a JSON object with the following properties:
- id: A number (1, 2, 3, etc.)
- description: A detailed 2-3 sentence description of what happens in the scene, including camera angles, transitions, and mood
- duration: How long the scene should last (in seconds)
- visualElements: An array of visual elements to include (text overlays, effects, props, etc.)

Wrap the scenes in a JSON object under the key "scenes", inside a ```json code block.

Example scene format:
{
"id": 1,
"description": "Open with a low-angle shot of a person walking confidently toward the camera. The background is slightly blurred with warm lighting creating a golden hour effect. The subject is smiling and dressed in vibrant colors.",
"duration": "5 seconds",
"visualElements": ["Text overlay: 'Your Journey Begins'", "Subtle lens flare", "Smooth tracking shot"]
}"""


def should_use_search(query: str) -> bool:
    """Return True if the query asks about something time-sensitive."""
    lowered = query.lower()
    return any(trigger in lowered for trigger in SEARCH_TRIGGERS)


def format_search_results(results: Sequence[SearchResult]) -> str:
    """Render search hits as prompt context.

    Args:
        results: Ranked search results. Only the first five are used.

    Returns:
        A block of ``[title] snippet`` lines separated by blank lines.
    """
    if not results:
        return NO_SEARCH_RESULTS

    lines = [
        f"[{result.title}] {result.snippet}"
        for result in results[:MAX_SEARCH_RESULTS]
    ]
    return "Here are some relevant search results:\n\n" + "\n\n".join(lines)


def build_system_prompt(
    platform: str,
    video_length: int,
    search_context: Optional[str] = None,
) -> str:
    """Build the system prompt for a storyboard chat turn.

    Args:
        platform: Target platform, e.g. "tiktok".
        video_length: Target video length in seconds.
        search_context: Formatted search results to ground the answer.

    Returns:
        The system instruction string. It always ends with the scene
        JSON template the extractor relies on.
    """
    prompt_parts = [
        "You are an AI video creation assistant.",
        f"You help users create videos for {platform} with a length of {video_length} seconds.",
        "Respond in a helpful, creative way. When the user describes a video idea, "
        "generate 3-4 scenes for the video.",
    ]
    prompt = "\n".join(prompt_parts)

    if search_context:
        prompt += (
            "\n\nHere is some up-to-date information that might be relevant "
            f"to the user's request:\n{search_context}\n\n"
            "Use this information to make the video scenes more accurate and current."
        )

    return f"{prompt}\n\n{SCENE_FORMAT_TEMPLATE}"


def build_video_prompt(scene: Scene, max_length: int = MAX_VIDEO_PROMPT_LENGTH) -> str:
    """Build the text-to-video prompt for a scene.

    The provider rejects long prompts, so the result is cut to ``max_length``
    characters with a trailing ellipsis.
    """
    prompt = scene.description
    elements = [e for e in scene.visual_elements[:MAX_VISUAL_ELEMENTS] if e]
    if elements:
        prompt += f" Including: {', '.join(elements)}"

    if len(prompt) > max_length:
        prompt = prompt[: max_length - 3] + "..."
    return prompt
