"""Chat proxy route."""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ai_proxy.api.deps import get_app_settings, get_upstream
from ai_proxy.common.llm import UpstreamClient
from ai_proxy.core.config import Settings
from ai_proxy.core.exceptions import AppError
from ai_proxy.domain.chat import chat_service
from ai_proxy.schemas.chat import ChatErrorResponse, ChatResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["chat"])


async def read_json_body(request: Request):
    """Parsed JSON body, or None when the body is empty, not JSON or not sent as JSON."""
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type != "application/json":
        return None
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "messages missing, empty or not an array"},
        500: {"model": ChatErrorResponse, "description": "Unexpected failure"},
    },
)
async def chat(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    upstream: UpstreamClient = Depends(get_upstream),
):
    """Forward the first message to the upstream model.

    Upstream failures still answer 200 with a fallback envelope; only faults
    outside that path become a 500.
    """
    logger.info("[CHAT] request received")
    body = await read_json_body(request)
    try:
        return await chat_service(body, settings, upstream)
    except AppError:
        raise
    except Exception as e:
        logger.exception("[CHAT] unhandled error: %s", e)
        error = ChatErrorResponse(
            error="Error processing request",
            message=str(e),
            project=settings.project_id,
            note="Service is still running, check the logs",
        )
        return JSONResponse(status_code=500, content=error.model_dump())
