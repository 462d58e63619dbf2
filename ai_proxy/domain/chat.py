import logging
from enum import Enum
from typing import Any

from pydantic import ValidationError

from ai_proxy.common.llm import EMPTY_RESPONSE, UpstreamAnswer, UpstreamClient, UpstreamFailure, UpstreamResult
from ai_proxy.core.config import Settings
from ai_proxy.core.exceptions import BadRequestError
from ai_proxy.schemas.chat import ChatChoice, ChatMessage, ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

DEFAULT_QUESTION = "Hello"
MESSAGES_REQUIRED = "A non-empty messages array is required"
NO_UPSTREAM_RESULT = "no upstream result"

MOCK_TEMPLATE = "Development mode\n\nQuestion: {question}\n\nProject: {project}"
FALLBACK_TEMPLATE = (
    "AI response (fallback mode)\n\n"
    "Question: {question}\n\n"
    "Project: {project}\n\n"
    "Permissions are verified, the API call is being debugged..."
)


class ChatMode(str, Enum):
    production = "production"
    mock = "mock"


def chat_mode(settings: Settings) -> ChatMode:
    return ChatMode.production if settings.is_production else ChatMode.mock


def parse_chat_request(body: Any) -> ChatRequest:
    """Validate the raw JSON body; anything without a usable `messages` list is a 400."""
    if not isinstance(body, dict):
        raise BadRequestError(MESSAGES_REQUIRED)
    try:
        return ChatRequest.model_validate(body)
    except ValidationError:
        raise BadRequestError(MESSAGES_REQUIRED)


def extract_question(messages: list[Any]) -> str:
    """Content of the first message, or the default question when it has none.

    Raises TypeError for a null first message or non-string content; the route
    reports those as an unexpected failure.
    """
    first = messages[0]
    if first is None:
        raise TypeError("first message is null")
    content = first.get("content") if isinstance(first, dict) else None
    if not content:
        return DEFAULT_QUESTION
    if not isinstance(content, str):
        raise TypeError(f"message content must be a string, got {type(content).__name__}")
    return content


def _envelope(content: str, **fields: Any) -> ChatResponse:
    return ChatResponse(choices=[ChatChoice(message=ChatMessage(content=content))], **fields)


def normalize_response(
    mode: ChatMode,
    question: str,
    project_id: str,
    result: UpstreamResult | None = None,
) -> ChatResponse:
    """Map a mode and an upstream outcome onto the response envelope.

    Pure function. Every combination maps to an envelope:

    - mock mode: templated mock content, `source="mock"`; `result` is ignored
    - production + answer: the answer text with `model` and `tokens`
    - production + failure (or no result, or an empty answer): templated
      fallback content, `source="fallback"` and the failure message in `error`
    """
    if mode is ChatMode.mock:
        return _envelope(MOCK_TEMPLATE.format(question=question, project=project_id), source="mock")

    if result is None:
        result = UpstreamFailure(message=NO_UPSTREAM_RESULT)
    elif isinstance(result, UpstreamAnswer) and not result.text.strip():
        result = UpstreamFailure(message=EMPTY_RESPONSE)

    if isinstance(result, UpstreamAnswer):
        return _envelope(result.text, model=result.model, tokens=dict(result.usage))

    return _envelope(
        FALLBACK_TEMPLATE.format(question=question, project=project_id),
        source="fallback",
        error=result.message or EMPTY_RESPONSE,
    )


async def chat_service(body: Any, settings: Settings, upstream: UpstreamClient) -> ChatResponse:
    """Validate, ask the upstream once (production only) and normalize the outcome."""
    request = parse_chat_request(body)
    question = extract_question(request.messages)
    logger.info("[CHAT] question: %r", question[:50])

    mode = chat_mode(settings)
    result = None
    if mode is ChatMode.production:
        result = await upstream.generate(question)
        if isinstance(result, UpstreamFailure):
            logger.warning("[CHAT] upstream failed, using fallback: %s", result.message)

    return normalize_response(mode, question, settings.project_id, result)
