"""Storyboard data model."""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .scene import Scene


class Storyboard(BaseModel):
    """An ordered list of scenes for one video concept."""

    title: str = Field(default="Untitled storyboard", description="Storyboard title")
    platform: str = Field(default="tiktok", description="Target platform")
    video_length: int = Field(default=30, description="Target length in seconds", gt=0)
    scenes: List[Scene] = Field(default_factory=list, description="List of scenes")

    class Config:
        """Pydantic config."""
        frozen = False
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_yaml(cls, path: Path) -> "Storyboard":
        """Load storyboard from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    def to_yaml(self, path: Path) -> None:
        """Save storyboard to YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(
                self.model_dump(by_alias=True),
                f,
                default_flow_style=False,
                sort_keys=False,
            )
