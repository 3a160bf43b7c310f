"""Chat, video generation, search and health endpoints."""

import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .. import __version__
from ..agents import ChatTurnInput, StoryboardAgent
from ..config import Config
from ..errors import ErrorResponse, ProviderError
from ..rendering import VideoRenderer
from ..services.search import SerperClient
from .dependencies import (
    get_agent_factory,
    get_config,
    get_renderer_factory,
    get_search_client_factory,
)
from .schemas import (
    ChatRequest,
    ChatResponse,
    HealthResponse,
    ProviderStatus,
    SearchErrorResponse,
    SearchRequest,
    SearchResponse,
    VideoRequest,
    VideoResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["studio"])

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def error_response(status_code: int, error: str, details: Any = None) -> JSONResponse:
    """Build a JSON error body."""
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@router.post("/chat", response_model=ChatResponse, responses=ERROR_RESPONSES)
def chat(
    request: ChatRequest,
    agent_factory: Callable[[], StoryboardAgent] = Depends(get_agent_factory),
):
    """Run one storyboard chat turn."""
    if not request.messages:
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid messages format")

    agent = agent_factory()

    try:
        result = agent.run(ChatTurnInput(
            messages=request.messages,
            platform=request.platform,
            video_length=request.video_length,
        ))
    except ProviderError as e:
        logger.error(f"Error calling language model: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to get response from the language model",
            e.message,
        )
    except Exception as e:
        logger.exception("Error in chat API")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to process your request",
            str(e),
        )

    return ChatResponse(
        response=result.response,
        scenes=result.scenes,
        search_used=result.search_used,
    )


@router.post("/generate-video", response_model=VideoResponse, responses=ERROR_RESPONSES)
def generate_video(
    request: VideoRequest,
    renderer_factory: Callable[[], VideoRenderer] = Depends(get_renderer_factory),
):
    """Render a clip for the first scene of the request."""
    if not request.scenes:
        return error_response(status.HTTP_400_BAD_REQUEST, "No valid scenes provided")

    renderer = renderer_factory()

    try:
        result = renderer.render(request.scenes)
    except Exception as e:
        logger.exception("Unexpected error in video generation")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to process your request",
            str(e),
        )

    if not result.success:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            result.error or "Failed to generate video",
            result.details,
        )

    return VideoResponse(
        success=True,
        video_url=result.video_url,
        thumbnail_url=result.thumbnail_url,
        duration=result.duration,
        message=result.message,
        model_limitation=result.model_limitation,
    )


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": SearchErrorResponse},
    },
)
def search(
    request: SearchRequest,
    client_factory: Callable[[], SerperClient] = Depends(get_search_client_factory),
):
    """Run a web search."""
    if not request.query.strip():
        return error_response(status.HTTP_400_BAD_REQUEST, "Search query is required")

    try:
        client = client_factory()
        results = client.search(request.query)
    except Exception as e:
        logger.error(f"Search API error: {e}")
        body = SearchErrorResponse(error=str(e) or "Failed to perform search")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=jsonable_encoder(body.model_dump(by_alias=True)),
        )

    return SearchResponse(search_results=results)


health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=HealthResponse)
def health(cfg: Config = Depends(get_config)):
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        version=__version__,
        providers=ProviderStatus(
            llm=bool(cfg.anthropic_api_key),
            video=bool(cfg.fal_api_key),
            search=bool(cfg.serper_api_key),
        ),
    )
