"""Tests for completion request building and reply parsing."""

import asyncio

import pytest

from app.core.errors import CompletionUnavailable, MalformedCompletion
from app.services import completion
from app.services.completion import CompletionRequestor
from app.services.llm.base import Message
from tests.conftest import FakeProvider


def test_contents_keep_order_and_append_user_message():
    prior = [Message("user", "hi"), Message("model", "hello")]
    contents = completion.build_contents(prior, "how are you?")
    assert [(m.role, m.content) for m in contents] == [
        ("user", "hi"),
        ("model", "hello"),
        ("user", "how are you?"),
    ]


def test_system_instruction_without_redirect():
    assert completion.build_system_instruction("Be kind.", False, ["A", "B"]) == "Be kind."


def test_system_instruction_with_redirect_lists_topics():
    instruction = completion.build_system_instruction("Be kind.", True, ["Sleep", "Grief"])
    assert instruction.startswith("Be kind.")
    assert "Topics: Sleep, Grief" in instruction


def test_schema_only_has_redirect_field_when_eligible():
    plain = completion.build_response_schema(False)
    assert plain["required"] == ["message"]
    assert list(plain["properties"]) == ["message"]

    redirectable = completion.build_response_schema(True, ["Sleep"])
    assert set(redirectable["properties"]) == {"message", "redirectToOtherCategory"}
    assert redirectable["required"] == ["message"]


def test_parse_valid_reply():
    result = completion.parse_completion(
        '{"message": "hi", "redirectToOtherCategory": "Sleep"}', True, ["Sleep"]
    )
    assert result.message == "hi"
    assert result.redirect_to_other_category == "Sleep"


def test_parse_empty_redirect_is_none():
    result = completion.parse_completion('{"message": "hi", "redirectToOtherCategory": ""}', True, ["Sleep"])
    assert result.redirect_to_other_category is None


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '{"message": 3}', "{}"])
def test_parse_rejects_malformed(raw):
    with pytest.raises(MalformedCompletion):
        completion.parse_completion(raw, False, [])


def test_requestor_passes_built_request_to_provider():
    provider = FakeProvider()
    provider.reply_with('{"message": "welcome back"}')
    requestor = CompletionRequestor(provider)

    result = asyncio.run(
        requestor.request([Message("user", "hi")], "again", "Be kind.", redirectable=True, topics=["Sleep"])
    )
    assert result.message == "welcome back"
    call = provider.calls[0]
    assert [m.content for m in call["messages"]] == ["hi", "again"]
    assert "Sleep" in call["system_instruction"]


def test_requestor_propagates_unavailable():
    provider = FakeProvider()
    provider.reply_with(CompletionUnavailable())
    with pytest.raises(CompletionUnavailable):
        asyncio.run(CompletionRequestor(provider).request([], "hi", "Be kind."))


def test_requestor_maps_unexpected_provider_errors():
    provider = FakeProvider()
    provider.reply_with(RuntimeError("connection reset"))
    with pytest.raises(CompletionUnavailable):
        asyncio.run(CompletionRequestor(provider).request([], "hi", "Be kind."))


def test_unknown_provider_is_unavailable(monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "llm_provider", "nope")
    with pytest.raises(CompletionUnavailable):
        asyncio.run(CompletionRequestor().request([], "hi", "Be kind."))


def test_stateless_completion_endpoint(client, user_headers, fake_llm):
    fake_llm.reply_with('{"message": "sure", "redirectToOtherCategory": "Sleep"}')
    response = client.post(
        "/api/gemini/chat",
        json={
            "prevMessages": [{"role": "user", "content": "hi"}, {"role": "model", "content": "hello"}],
            "userMessage": "I can't sleep",
            "session": {"systemInstruction": "Be kind.", "redirectToOtherCategory": True, "topics": ["Sleep"]},
        },
        headers=user_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"response": {"message": "sure", "redirectToOtherCategory": "Sleep"}}
    assert len(fake_llm.calls[0]["messages"]) == 3


def test_stateless_completion_missing_fields(client, user_headers):
    response = client.post("/api/gemini/chat", json={"userMessage": "hi"}, headers=user_headers)
    assert response.status_code == 400


def test_stateless_completion_rejects_unknown_role(client, user_headers, fake_llm):
    response = client.post(
        "/api/gemini/chat",
        json={
            "prevMessages": [{"role": "bot", "content": "hello"}],
            "userMessage": "hi",
            "session": {"systemInstruction": "Be kind."},
        },
        headers=user_headers,
    )
    assert response.status_code == 400
    assert "error" in response.json()
    assert fake_llm.calls == []
