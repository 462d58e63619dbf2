"""Chat-related Pydantic schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Inbound `/chat` body. Only `messages[0].content` is consulted."""

    messages: list[Any] = Field(..., min_length=1)


class ChatMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str = Field(..., min_length=1)


class ChatChoice(BaseModel):
    message: ChatMessage


class ChatResponse(BaseModel):
    """Normalized envelope returned by `/chat` on every 200 path."""

    choices: list[ChatChoice] = Field(..., min_length=1, max_length=1)
    model: str | None = None
    tokens: dict[str, Any] | None = None
    source: Literal["fallback", "mock"] | None = None
    error: str | None = None


class ChatErrorResponse(BaseModel):
    error: str
    message: str
    project: str
    note: str
