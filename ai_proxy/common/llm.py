# ai_proxy/common/llm.py

from __future__ import annotations

import logging
from typing import Any, Protocol

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage
from langchain_google_vertexai import ChatVertexAI
from pydantic import BaseModel, ConfigDict, Field

from ai_proxy.core.config import Settings

logger = logging.getLogger(__name__)

EMPTY_RESPONSE = "empty response from upstream"


class UpstreamAnswer(BaseModel):
    """Generated answer plus what the upstream reported about it."""

    model_config = ConfigDict(frozen=True)

    text: str
    model: str
    usage: dict[str, Any] = Field(default_factory=dict)


class UpstreamFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


UpstreamResult = UpstreamAnswer | UpstreamFailure


class UpstreamClient(Protocol):
    """Anything that can answer one question with exactly one upstream attempt."""

    async def generate(self, question: str) -> UpstreamResult: ...


def message_text(message: BaseMessage) -> str:
    """Flatten a chat message's content (plain string or content blocks) to text."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type", "text") == "text":
            parts.append(block.get("text") or "")
    return "".join(parts)


class VertexChatClient:
    """Upstream client backed by a Vertex AI chat model.

    The chat model is built on first use so a missing credential surfaces as an
    upstream failure of that request rather than a startup crash. Tests pass any
    langchain chat model through `llm`.
    """

    def __init__(self, settings: Settings, llm: BaseChatModel | None = None):
        self.settings = settings
        self._llm = llm

    @property
    def model_name(self) -> str:
        return self.settings.vertex_model

    def _get_llm(self) -> BaseChatModel:
        if self._llm is None:
            logger.info(
                "[LLM] init (model=%s, project=%s, location=%s)",
                self.model_name,
                self.settings.project_id,
                self.settings.location,
            )
            # No retries: each request gets a single upstream attempt
            self._llm = ChatVertexAI(
                model=self.model_name,
                project=self.settings.project_id,
                location=self.settings.location,
                max_retries=0,
            )
        return self._llm

    async def generate(self, question: str) -> UpstreamResult:
        try:
            llm = self._get_llm()
            logger.info("[LLM] generating content (model=%s)", self.model_name)
            response = await llm.ainvoke([HumanMessage(content=question)])
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.error("[LLM] upstream error: %s", message)
            return UpstreamFailure(message=message)

        text = message_text(response)
        if not text.strip():
            logger.error("[LLM] upstream error: %s", EMPTY_RESPONSE)
            return UpstreamFailure(message=EMPTY_RESPONSE)

        metadata = getattr(response, "response_metadata", None) or {}
        usage = getattr(response, "usage_metadata", None) or {}
        logger.info("[LLM] generated (length=%d)", len(text))
        return UpstreamAnswer(
            text=text,
            model=metadata.get("model_name") or self.model_name,
            usage=dict(usage),
        )
