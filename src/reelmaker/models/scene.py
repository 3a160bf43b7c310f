"""Scene data model."""

from typing import List

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_DURATION = "5 seconds"


class Scene(BaseModel):
    """A single storyboard unit.

    ``duration`` is a display string such as ``"5 seconds"``, not a number.
    """

    id: int = Field(..., description="1-based position in the storyboard", gt=0)
    description: str = Field(..., description="What happens in the scene")
    duration: str = Field(default=DEFAULT_DURATION, description="Target length, e.g. '5 seconds'")
    visual_elements: List[str] = Field(
        default_factory=list, description="Overlays, effects, props and shots"
    )

    class Config:
        """Pydantic config."""
        frozen = False
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value):
        # Models sometimes answer with a bare number of seconds
        if isinstance(value, bool):
            return DEFAULT_DURATION
        if isinstance(value, (int, float)):
            return f"{value:g} seconds"
        return value

    def to_wire(self) -> dict:
        """Return the camelCase JSON representation."""
        return self.model_dump(by_alias=True)
