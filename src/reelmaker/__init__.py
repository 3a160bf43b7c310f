"""Chat-driven AI video creator: storyboards from Claude, clips from fal.ai."""

__version__ = "0.1.0"
