"""Request and response bodies for the HTTP API."""

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..models import Message, Scene, SearchResult


class ApiModel(BaseModel):
    """Base for API bodies: camelCase on the wire, snake_case in Python."""

    class Config:
        """Pydantic config."""
        alias_generator = to_camel
        populate_by_name = True


class ChatRequest(ApiModel):
    """Request type for one chat turn"""
    messages: List[Message]
    platform: str = "tiktok"
    video_length: int = Field(default=30, gt=0)


class ChatResponse(ApiModel):
    """Response type for one chat turn"""
    response: str
    scenes: List[Scene] = Field(default_factory=list)
    search_used: bool = False


class VideoRequest(ApiModel):
    """Request type for rendering a clip"""
    scenes: List[Scene]


class VideoResponse(ApiModel):
    """Response type for a rendered clip"""
    success: bool = True
    video_url: str
    thumbnail_url: Optional[str] = None
    duration: int
    message: str
    model_limitation: str


class SearchRequest(ApiModel):
    """Request type for web search"""
    query: str = ""


class SearchResponse(ApiModel):
    """Response type for web search"""
    search_results: List[SearchResult] = Field(default_factory=list)


class SearchErrorResponse(ApiModel):
    """Error type for web search; always carries an empty result list"""
    error: str
    search_results: List[SearchResult] = Field(default_factory=list)


class ProviderStatus(ApiModel):
    """Which provider credentials are configured"""
    llm: bool
    video: bool
    search: bool


class HealthResponse(ApiModel):
    """Response type for the health check"""
    status: str
    version: str
    providers: ProviderStatus
