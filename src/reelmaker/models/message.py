"""Conversation message model."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .scene import Scene


class Message(BaseModel):
    """One turn of the conversation transcript."""

    role: Literal["user", "assistant"] = Field(..., description="Who wrote the turn")
    content: str = Field(..., description="Turn text")
    scenes: Optional[List[Scene]] = Field(None, description="Scenes generated on this turn")
    search_used: Optional[bool] = Field(None, description="Whether web search grounded the turn")

    class Config:
        """Pydantic config."""
        frozen = True
        alias_generator = to_camel
        populate_by_name = True
