"""Unit tests for Pydantic API schemas."""

import pytest
from pydantic import TypeAdapter, ValidationError

from farmhand.api.schemas import (
    Advisory,
    AdvisoryRequest,
    ChatRequest,
    DiagnosisRequest,
    FinalChartResponse,
    FinalResponse,
    FinalTextResponse,
    MarketRecord,
    SeedVariety,
)


class TestChatRequest:

    def test_valid_request(self):
        req = ChatRequest(message="Will it rain tomorrow?", language="hi")
        assert req.message == "Will it rain tomorrow?"
        assert req.language == "hi"

    def test_empty_message_rejected(self):
        with pytest.raises(ValidationError):
            ChatRequest(message="")

    def test_null_history_and_language(self):
        req = ChatRequest.model_validate({"message": "hi", "history": None, "language": None})
        assert req.history == []
        assert req.language == "en"

    def test_invalid_role_rejected(self):
        with pytest.raises(ValidationError):
            ChatRequest(message="hi", history=[{"role": "system", "content": "x"}])


class TestFinalResponse:

    def test_text_serialization(self):
        resp = FinalTextResponse(data="Hello")
        assert resp.model_dump(by_alias=True) == {"type": "text", "data": "Hello", "audio": None}

    def test_chart_serializes_camel_case(self, chart_payload):
        resp = FinalChartResponse.model_validate(chart_payload)
        dumped = resp.model_dump(by_alias=True)
        assert dumped["data"]["chartType"] == "bar"
        assert dumped["audio"] is None

    def test_discriminator_selects_variant(self, chart_payload):
        adapter = TypeAdapter(FinalResponse)
        assert isinstance(adapter.validate_python(chart_payload), FinalChartResponse)
        assert isinstance(adapter.validate_python({"type": "text", "data": "x"}), FinalTextResponse)

    def test_audio_must_be_data_uri(self):
        with pytest.raises(ValidationError):
            FinalTextResponse(data="x", audio="https://example.com/a.mp3")

    def test_audio_data_uri_accepted(self):
        resp = FinalTextResponse(data="x", audio="data:audio/wav;base64,UklGRg==")
        assert resp.audio.startswith("data:audio/wav")


class TestDiagnosisRequest:

    def test_camel_case_input(self):
        req = DiagnosisRequest.model_validate({
            "problemDescription": "Yellow spots on my tomato leaves",
            "photoDataUri": "data:image/jpeg;base64,/9j/4AAQ",
        })
        assert req.photo_data_uri.startswith("data:image/jpeg")
        assert req.language == "en"

    @pytest.mark.parametrize("desc", ["too short", "x" * 1001])
    def test_description_length_bounds(self, desc):
        with pytest.raises(ValidationError):
            DiagnosisRequest(problem_description=desc)

    def test_description_at_bounds(self):
        assert DiagnosisRequest(problem_description="x" * 10)
        assert DiagnosisRequest(problem_description="x" * 1000)

    def test_photo_must_be_data_uri(self):
        with pytest.raises(ValidationError):
            DiagnosisRequest(problem_description="Leaves are wilting fast", photo_data_uri="leaf.jpg")


class TestAdvisory:

    def test_request_requires_crops(self):
        with pytest.raises(ValidationError):
            AdvisoryRequest(location="Guntur", crops=[], soil_type="Black")

    @pytest.mark.parametrize("risk", [-1, 101])
    def test_risk_probability_bounds(self, risk):
        with pytest.raises(ValidationError):
            Advisory(
                title="Heat Stress Warning for Corn", urgency="High", risk_probability=risk,
                pest_or_disease="Heat stress", affected_crop="Corn", impact_analysis="...",
                preventive_action="Irrigate in the early morning.", image_hint="corn heat",
            )


class TestToolRecords:

    def test_market_record_enums(self):
        with pytest.raises(ValidationError):
            MarketRecord(name="Pune Market", price=2000, demand="Very High", trend="Up")

    def test_seed_variety_yield_alias(self):
        variety = SeedVariety.model_validate(
            {"name": "IR-64", "yield": "20 q/acre", "duration": "120 days", "characteristics": []}
        )
        assert variety.yield_ == "20 q/acre"
        assert variety.model_dump(by_alias=True)["yield"] == "20 q/acre"


@pytest.mark.parametrize("language", [5, 1.5, ["en"]])
def test_non_string_language_is_validation_error(language):
    with pytest.raises(ValidationError):
        ChatRequest.model_validate({"message": "hi", "language": language})
