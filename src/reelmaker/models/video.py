"""Saved video history model."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .scene import Scene


class SavedVideo(BaseModel):
    """A generated video kept in the local history."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique identifier")
    video_url: str = Field(..., description="URL of the rendered clip")
    thumbnail_url: Optional[str] = Field(None, description="URL of the clip thumbnail")
    title: str = Field(..., description="Display title")
    description: Optional[str] = Field(None, description="Display description")
    duration: int = Field(default=5, description="Clip length in seconds")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation time")
    scenes: Optional[List[Scene]] = Field(None, description="Snapshot of the rendered scenes")
    deleted: Optional[bool] = Field(None, description="Soft-delete flag")

    class Config:
        """Pydantic config."""
        frozen = False
        alias_generator = to_camel
        populate_by_name = True
