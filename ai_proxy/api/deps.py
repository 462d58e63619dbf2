"""Dependency providers.

Settings and the upstream client are created once in `create_app` and kept on
`app.state`; handlers receive them through these functions.
"""

from fastapi import Request

from ai_proxy.common.llm import UpstreamClient
from ai_proxy.core.config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upstream(request: Request) -> UpstreamClient:
    return request.app.state.upstream
