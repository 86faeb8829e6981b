"""Unit tests for request normalization and history assembly."""

import pytest
from langchain_core.messages import AIMessage, HumanMessage
from pydantic import ValidationError

from farmhand.api.schemas import ConversationTurn
from farmhand.core.context_builder import (
    TOOL_RESULT_PREFIX,
    _estimate_tokens,
    build_history_messages,
    normalize_request,
    turn_to_message,
)


class TestNormalizeRequest:

    def test_defaults(self):
        req = normalize_request("Hello")
        assert req.history == []
        assert req.language == "en"

    def test_blank_language_defaults_to_english(self):
        assert normalize_request("Hello", language="  ").language == "en"

    def test_keeps_language(self):
        assert normalize_request("నమస్కారం", language="te").language == "te"

    def test_strips_message(self):
        assert normalize_request("  weather?  ").message == "weather?"

    @pytest.mark.parametrize("message", ["", "   "])
    def test_empty_message_rejected(self, message):
        with pytest.raises(ValidationError):
            normalize_request(message)

    def test_history_order_preserved(self, sample_history):
        req = normalize_request("And tomorrow?", history=sample_history)
        assert [t.role for t in req.history] == ["user", "tool", "model"]


class TestTurnToMessage:

    def test_user_turn(self):
        msg = turn_to_message(ConversationTurn(role="user", content="hi"))
        assert isinstance(msg, HumanMessage)

    def test_model_turn_with_parts(self):
        turn = ConversationTurn(role="model", content=[{"text": "Line one"}, {"text": "Line two"}])
        msg = turn_to_message(turn)
        assert isinstance(msg, AIMessage)
        assert msg.content == "Line one\nLine two"

    def test_tool_turn_forwarded_as_summary(self):
        turn = ConversationTurn(role="tool", content=[{"data": {"temperature": 30}}])
        msg = turn_to_message(turn)
        assert isinstance(msg, AIMessage)
        assert msg.content.startswith(TOOL_RESULT_PREFIX)
        assert "30" in msg.content

    def test_empty_turn_dropped(self):
        assert turn_to_message(ConversationTurn(role="model", content="  ")) is None


class TestBuildHistoryMessages:

    def test_chronological(self, sample_history):
        req = normalize_request("And tomorrow?", history=sample_history)
        messages = build_history_messages(req.history, token_budget=10_000)
        assert [type(m) for m in messages] == [HumanMessage, AIMessage, AIMessage]
        assert messages[-1].content == "It is sunny and 30°C in Guntur today."

    def test_budget_drops_oldest(self):
        history = [ConversationTurn(role="user" if i % 2 == 0 else "model", content=f"{i}" * 40)
                   for i in range(6)]
        messages = build_history_messages(history, token_budget=25)
        # each turn is 10 tokens, so only the two newest fit
        assert [m.content[0] for m in messages] == ["4", "5"]

    def test_budget_from_env(self, monkeypatch):
        monkeypatch.setenv("HISTORY_TOKEN_BUDGET", "0")
        history = [ConversationTurn(role="user", content="x" * 40)]
        assert build_history_messages(history) == []

    def test_empty_history(self):
        assert build_history_messages([]) == []


def test_estimate_tokens():
    assert _estimate_tokens("a" * 400) == 100
