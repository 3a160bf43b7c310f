"""Search result model."""

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    """One ranked organic web search hit."""

    title: str = Field(default="", description="Result title")
    link: str = Field(default="", description="Result URL")
    snippet: str = Field(default="", description="Result snippet")
    position: int = Field(..., description="1-based rank", gt=0)
