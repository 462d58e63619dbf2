"""Response normalizer and request parsing tests."""

import pytest

from ai_proxy.common.llm import UpstreamAnswer, UpstreamFailure
from ai_proxy.core.exceptions import BadRequestError
from ai_proxy.domain.chat import (
    DEFAULT_QUESTION,
    ChatMode,
    chat_mode,
    extract_question,
    normalize_response,
    parse_chat_request,
)


def test_mock_mode_ignores_upstream_result():
    answer = UpstreamAnswer(text="real answer", model="m")
    envelope = normalize_response(ChatMode.mock, "What is 2+2?", "proj", answer)
    assert envelope.source == "mock"
    assert envelope.model is None
    assert "What is 2+2?" in envelope.choices[0].message.content
    assert "proj" in envelope.choices[0].message.content
    assert "real answer" not in envelope.choices[0].message.content


def test_answer_is_passed_through_verbatim():
    answer = UpstreamAnswer(text="  exact\ntext  ", model="gemini", usage={"total_tokens": 4})
    envelope = normalize_response(ChatMode.production, "q", "proj", answer)
    assert envelope.choices[0].message.content == "  exact\ntext  "
    assert envelope.choices[0].message.role == "assistant"
    assert envelope.model == "gemini"
    assert envelope.tokens == {"total_tokens": 4}
    assert envelope.source is None
    assert envelope.error is None


@pytest.mark.parametrize(
    "result, error",
    [
        (UpstreamFailure(message="quota exceeded"), "quota exceeded"),
        (UpstreamAnswer(text="   ", model="m"), "empty response from upstream"),
        (None, "no upstream result"),
    ],
)
def test_production_failures_fall_back(result, error):
    envelope = normalize_response(ChatMode.production, "Hello", "proj", result)
    assert envelope.source == "fallback"
    assert envelope.error == error
    assert len(envelope.choices) == 1
    content = envelope.choices[0].message.content
    assert "Hello" in content
    assert "proj" in content


def test_unset_fields_are_dropped_from_json():
    envelope = normalize_response(ChatMode.production, "q", "p", UpstreamAnswer(text="a", model="m"))
    assert envelope.model_dump(exclude_none=True) == {
        "choices": [{"message": {"role": "assistant", "content": "a"}}],
        "model": "m",
        "tokens": {},
    }


def test_chat_mode_follows_settings(dev_settings, prod_settings):
    assert chat_mode(dev_settings) is ChatMode.mock
    assert chat_mode(prod_settings) is ChatMode.production


@pytest.mark.parametrize(
    "messages, question",
    [
        ([{"content": "Hi"}], "Hi"),
        ([{"content": "Hi"}, {"content": "ignored"}], "Hi"),
        ([{"role": "user"}], DEFAULT_QUESTION),
        ([{"content": ""}], DEFAULT_QUESTION),
        (["plain string"], DEFAULT_QUESTION),
        ([{"content": 0}], DEFAULT_QUESTION),
    ],
)
def test_extract_question(messages, question):
    assert extract_question(messages) == question


@pytest.mark.parametrize("messages", [[None], [{"content": 42}], [{"content": ["a"]}], [{"content": {"text": "a"}}]])
def test_extract_question_rejects_null_message_and_non_string_content(messages):
    with pytest.raises(TypeError):
        extract_question(messages)


@pytest.mark.parametrize("body", [None, [], "text", {}, {"messages": []}, {"messages": 3}])
def test_parse_chat_request_rejects(body):
    with pytest.raises(BadRequestError) as exc_info:
        parse_chat_request(body)
    assert exc_info.value.status_code == 400
    assert exc_info.value.error == "Bad Request"


def test_parse_chat_request_keeps_extra_message_fields():
    request = parse_chat_request({"messages": [{"role": "user", "content": "x", "name": "n"}], "model": "ignored"})
    assert request.messages == [{"role": "user", "content": "x", "name": "n"}]
