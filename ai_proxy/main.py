"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from ai_proxy.api.routes import router
from ai_proxy.common.llm import UpstreamClient, VertexChatClient
from ai_proxy.core.config import Settings, get_settings
from ai_proxy.core.exceptions import (
    AppError,
    app_exception_handler,
    general_exception_handler,
    http_exception_handler,
)
from ai_proxy.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("AI proxy starting")
    logger.info("  project:         %s", settings.project_id)
    logger.info("  service account: %s", settings.service_account)
    logger.info("  mode:            %s", "production" if settings.is_production else "development")
    logger.info("  model:           %s (%s)", settings.vertex_model, settings.location)
    logger.info("  port:            %d", settings.port)
    yield
    logger.info("AI proxy shutting down")


def create_app(settings: Settings | None = None, upstream: UpstreamClient | None = None) -> FastAPI:
    """Build the application around one immutable settings object and one upstream client."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Google AI Proxy",
        description="Chat proxy in front of a Vertex AI model with mock and fallback responses",
        version="0.1.0",
        lifespan=lifespan,
        # Only the three proxy routes are served
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.upstream = upstream or VertexChatClient(settings)

    # Exception handlers
    app.add_exception_handler(AppError, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ai_proxy.main:app",
        host=settings.host,
        port=settings.port,
    )
