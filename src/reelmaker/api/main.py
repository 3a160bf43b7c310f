"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..errors import ConfigurationError, ErrorResponse
from .routes import health_router, router

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed request bodies with a 400."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    body = ErrorResponse(error="Invalid request body", details=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """Report a missing provider credential as a server error."""
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    body = ErrorResponse(error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Reel Maker API",
        description="Chat-driven storyboards and AI video clip generation",
        version=__version__,
    )

    # CORS configuration for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)

    app.include_router(router)
    app.include_router(health_router)
    return app


app = create_app()
