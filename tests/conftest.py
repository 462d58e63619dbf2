"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from ai_proxy.common.llm import UpstreamAnswer, UpstreamFailure
from ai_proxy.core.config import Settings
from ai_proxy.main import create_app


class FakeUpstream:
    """Upstream double that returns a canned result and records questions."""

    def __init__(self, result=None, exc: Exception | None = None):
        self.result = result
        self.exc = exc
        self.questions: list[str] = []

    async def generate(self, question: str):
        self.questions.append(question)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture
def dev_settings():
    return Settings(env="development", project_id="test-project")


@pytest.fixture
def prod_settings():
    return Settings(env="production", project_id="test-project")


@pytest.fixture
def upstream():
    """Production upstream that answers successfully."""
    return FakeUpstream(
        UpstreamAnswer(
            text="Hi! How can I help?",
            model="gemini-test",
            usage={"input_tokens": 3, "output_tokens": 6, "total_tokens": 9},
        )
    )


@pytest.fixture
def failing_upstream():
    return FakeUpstream(UpstreamFailure(message="403 Permission denied on resource project"))


@pytest.fixture
def client(dev_settings):
    """Development-mode client; its upstream fails the test if called."""
    fake = FakeUpstream(exc=AssertionError("upstream must not be called in development mode"))
    return TestClient(create_app(dev_settings, fake))


@pytest.fixture
def make_client(prod_settings):
    """Build a production-mode client around the given upstream double."""

    def _make(upstream, raise_server_exceptions: bool = True):
        app = create_app(prod_settings, upstream)
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make


@pytest.fixture
def fake_upstream():
    """The FakeUpstream class, for tests that need a custom result."""
    return FakeUpstream
