"""Unit tests for the chat orchestrator (model backend and speech faked)."""

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from farmhand.agent.chat import FarmhandChat, attach_audio
from farmhand.api.schemas import FinalChartResponse, FinalTextResponse, TextResponse
from farmhand.core.context_builder import normalize_request
from farmhand.core.failures import BUSY_MESSAGE, ChatProcessingError
from farmhand.core.llm_adapter import LLMUnavailableError


@pytest.fixture
def request_en():
    return normalize_request("Hello there")


class TestSuccessfulTurns:

    def test_plain_string_becomes_text_with_audio(self, make_backend, registry, synthesizer, request_en):
        chat = FarmhandChat(make_backend(output="Namaste! How can I help?"), registry, synthesizer)
        resp = chat.respond(request_en)
        assert isinstance(resp, FinalTextResponse)
        assert resp.data == "Namaste! How can I help?"
        assert resp.audio == synthesizer.audio
        assert synthesizer.calls == [("Namaste! How can I help?", "en")]

    def test_chart_reply(self, make_backend, registry, synthesizer, chart_payload):
        chat = FarmhandChat(make_backend(output=chart_payload), registry, synthesizer)
        resp = chat.respond(normalize_request("Show me the weekly forecast", language="hi"))
        assert isinstance(resp, FinalChartResponse)
        assert synthesizer.calls == [(
            "7-Day Temperature Forecast for Guntur. Average daily temperature in °C for the coming week.",
            "hi",
        )]

    def test_chart_without_title_has_no_audio(self, make_backend, registry, synthesizer, chart_payload):
        chart_payload["data"]["title"] = ""
        chat = FarmhandChat(make_backend(output=chart_payload), registry, synthesizer)
        resp = chat.respond(normalize_request("chart please"))
        assert resp.audio is None
        assert synthesizer.calls == []

    def test_speech_failure_keeps_response(self, make_backend, registry, failing_synthesizer, request_en):
        chat = FarmhandChat(make_backend(output="All good."), registry, failing_synthesizer)
        resp = chat.respond(request_en)
        assert resp.data == "All good."
        assert resp.audio is None

    def test_no_synthesizer(self, make_backend, registry, request_en):
        resp = FarmhandChat(make_backend(output="ok"), registry).respond(request_en)
        assert resp.audio is None

    def test_backend_receives_prompt_history_and_tools(self, make_backend, registry, sample_history):
        backend = make_backend(output="Tomorrow looks cloudy.")
        chat = FarmhandChat(backend, registry)
        chat.respond(normalize_request("And tomorrow?", history=sample_history, language="te"))

        call = backend.calls[0]
        assert call["message"] == "And tomorrow?"
        assert call["language"] == "te"
        assert "'te'" in call["system_prompt"]
        assert [type(m) for m in call["history"]] == [HumanMessage, AIMessage, AIMessage]
        assert {t.name for t in call["tools"]} == set(registry.names)


class TestFailures:

    def test_transient_overload_returns_apology(self, make_backend, registry, synthesizer, request_en):
        backend = make_backend(error=RuntimeError("[GoogleGenerativeAI Error]: 503 Service Unavailable"))
        resp = FarmhandChat(backend, registry, synthesizer).respond(request_en)
        assert resp.model_dump(by_alias=True) == {"type": "text", "data": BUSY_MESSAGE, "audio": None}
        assert synthesizer.calls == []

    def test_wrapped_transient_overload(self, make_backend, registry, request_en):
        error = LLMUnavailableError("Both primary and fallback LLMs failed: 503 Service Unavailable")
        resp = FarmhandChat(make_backend(error=error), registry).respond(request_en)
        assert resp.data == BUSY_MESSAGE

    def test_hard_failure_propagates_message(self, make_backend, registry, request_en):
        chat = FarmhandChat(make_backend(error=RuntimeError("quota exceeded")), registry)
        with pytest.raises(ChatProcessingError, match="quota exceeded"):
            chat.respond(request_en)

    def test_hard_failure_during_overload_retry_propagates(self, registry, request_en):
        class RetryingBackend:
            def generate(self, **kwargs):
                try:
                    raise RuntimeError("503 Service Unavailable")
                except RuntimeError:
                    raise PermissionError("401 Unauthorized: invalid API key")

        with pytest.raises(ChatProcessingError, match="401 Unauthorized"):
            FarmhandChat(RetryingBackend(), registry).respond(request_en)

    @pytest.mark.parametrize("output", [None, "", {"type": "table", "data": []}])
    def test_malformed_output_is_processing_error(self, make_backend, registry, request_en, output):
        with pytest.raises(ChatProcessingError):
            FarmhandChat(make_backend(output=output), registry).respond(request_en)


class TestAttachAudio:

    def test_text_with_audio(self, synthesizer):
        final = attach_audio(TextResponse(data="hi"), synthesizer.audio)
        assert isinstance(final, FinalTextResponse)
        assert final.audio == synthesizer.audio

    def test_without_audio(self):
        assert attach_audio(TextResponse(data="hi"), None).audio is None
