"""Pydantic models for the API layer and the model-facing contracts.

Wire names are camelCase (``chartType``, ``windSpeed``) to match what the
UI and the model exchange; Python attributes stay snake_case.
"""

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_LANGUAGE = "en"

DATA_URI_PATTERN = r"^data:[\w.+-]+/[\w.+-]+;base64,"
AUDIO_DATA_URI_PATTERN = r"^data:audio/[\w.+-]+;base64,"


class CamelModel(BaseModel):
    """Base model serializing to camelCase, accepting either spelling."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictCamelModel(CamelModel):
    """CamelModel that rejects unknown keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


def _default_language(value):
    if value is None:
        return DEFAULT_LANGUAGE
    if not isinstance(value, str):
        # left for the str check to reject
        return value
    return value.strip() or DEFAULT_LANGUAGE


# Conversation

class ContentPart(BaseModel):
    """One part of a turn's content. Tool payloads ride along as extra keys."""
    model_config = ConfigDict(extra="allow")

    text: str | None = None
    data: Any = None


class ConversationTurn(BaseModel):
    """Single turn of conversation history, oldest first."""
    role: Literal["user", "model", "tool"]
    content: str | list[ContentPart]

    def text(self) -> str:
        """Flatten the content into plain text (structured parts as JSON)."""
        if isinstance(self.content, str):
            return self.content
        chunks = []
        for part in self.content:
            if part.text:
                chunks.append(part.text)
            else:
                extra = part.model_dump(exclude_none=True, exclude={"text"})
                if extra:
                    chunks.append(json.dumps(extra, ensure_ascii=False, default=str))
        return "\n".join(chunks)


class ChatRequest(BaseModel):
    """Incoming chat turn from the UI."""
    message: str = Field(..., min_length=1, description="User message")
    history: list[ConversationTurn] = Field(default_factory=list)
    language: str = Field(DEFAULT_LANGUAGE, description='Response language, e.g. "en", "te", "hi"')

    @field_validator("message")
    @classmethod
    def _strip_message(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("message must not be empty")
        return value

    @field_validator("history", mode="before")
    @classmethod
    def _default_history(cls, value):
        return [] if value is None else value

    @field_validator("language", mode="before")
    @classmethod
    def _normalize_language(cls, value):
        return _default_language(value)


# Chat responses

class ChartPoint(StrictCamelModel):
    name: str = Field(..., description="Label for the data point, e.g. '2024-09-23' or 'Corn'.")
    value: float = Field(..., description="Numerical value for the data point.")


class ChartData(StrictCamelModel):
    title: str = Field(..., description="Chart title, e.g. '7-Day Temperature Forecast'.")
    description: str = Field(..., description="What the chart shows, including units.")
    chart_type: Literal["bar", "line", "pie", "area"]
    data: list[ChartPoint]


class TextResponse(StrictCamelModel):
    type: Literal["text"] = "text"
    data: str = Field(..., description="Plain text reply to the user.")


class ChartResponse(StrictCamelModel):
    type: Literal["chart"] = "chart"
    data: ChartData


ChatResponse = Annotated[Union[TextResponse, ChartResponse], Field(discriminator="type")]


class ModelReply(BaseModel):
    """Structured-output envelope the chat model fills in."""
    reply: ChatResponse = Field(..., description="A 'text' reply, or a 'chart' reply for visualizable data.")


class FinalTextResponse(TextResponse):
    audio: str | None = Field(None, pattern=AUDIO_DATA_URI_PATTERN)


class FinalChartResponse(ChartResponse):
    audio: str | None = Field(None, pattern=AUDIO_DATA_URI_PATTERN)


FinalResponse = Annotated[Union[FinalTextResponse, FinalChartResponse], Field(discriminator="type")]


# Tool payloads. Inputs keep plain field names so LangChain tool-call args
# map straight onto the function parameters.

class WeatherQuery(BaseModel):
    city: str = Field(..., description="The city for which to get the weather.")
    days: int = Field(1, ge=1, le=16, description="Number of days to forecast (1 for today, 7 for a week).")


class WeatherDay(StrictCamelModel):
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    temperature: float = Field(..., description="Average temperature in Celsius.")
    condition: str
    humidity: float = Field(..., ge=0, le=100)
    wind_speed: float = Field(..., ge=0, description="Wind speed in km/h.")


SuggestionTopic = Literal["pest control", "crop rotation", "soil health", "irrigation", "harvesting"]


class SuggestionQuery(BaseModel):
    topic: SuggestionTopic = Field(..., description="The topic for which to get suggestions.")


class SeedQuery(BaseModel):
    crop_name: str = Field(..., description='Crop or seed variety, e.g. "rice", "IR-64 rice", "Pioneer 3396".')


class SeedVariety(StrictCamelModel):
    name: str
    yield_: str = Field(..., alias="yield")
    duration: str
    characteristics: list[str]


class SeedInfo(StrictCamelModel):
    varieties: list[SeedVariety]
    sowing_season: str
    average_price_per_kg: float
    common_pests: list[str]
    common_diseases: list[str]


class SeedInfoError(StrictCamelModel):
    error: str


class MarketQuery(BaseModel):
    crop_name: str = Field(..., description="The name of the crop.")
    district: str = Field("", description="The user's district.")
    state: str = Field("", description="The user's state.")


class MarketRecord(StrictCamelModel):
    name: str
    price: int = Field(..., description="Price per quintal in INR.")
    demand: Literal["High", "Medium", "Low"]
    trend: Literal["Up", "Stable", "Down"]


# Diagnosis

class DiagnosisRequest(CamelModel):
    problem_description: str = Field(..., min_length=10, max_length=1000)
    photo_data_uri: str | None = Field(None, pattern=DATA_URI_PATTERN)
    language: str = DEFAULT_LANGUAGE

    @field_validator("language", mode="before")
    @classmethod
    def _normalize_language(cls, value):
        return _default_language(value)


class Diagnosis(CamelModel):
    is_healthy: bool = Field(..., description="Whether the plant or soil is considered healthy.")
    issue: str = Field(..., description="The issue identified, e.g. 'Blight', 'Nitrogen Deficiency'.")
    details: str = Field(..., description="A detailed explanation of the diagnosis.")


class Solution(CamelModel):
    recommendation: str = Field(..., description="A concise, actionable recommendation.")
    steps: list[str] = Field(..., description="Step-by-step instructions to implement the solution.")


class DiagnosisResult(CamelModel):
    """What the model must produce for a diagnosis."""
    diagnosis: Diagnosis
    solution: Solution


class DiagnosisResponse(DiagnosisResult):
    audio: str | None = Field(None, pattern=AUDIO_DATA_URI_PATTERN)


# Proactive advisory

class AdvisoryRequest(CamelModel):
    location: str = Field(..., min_length=1)
    crops: list[str] = Field(..., min_length=1)
    soil_type: str = Field(..., min_length=1)
    language: str = DEFAULT_LANGUAGE

    @field_validator("language", mode="before")
    @classmethod
    def _normalize_language(cls, value):
        return _default_language(value)


class Advisory(CamelModel):
    title: str = Field(..., description="e.g. 'Fungal Disease Alert for Wheat'.")
    urgency: Literal["High", "Medium", "Low"]
    risk_probability: int = Field(..., ge=0, le=100)
    pest_or_disease: str
    affected_crop: str = Field(..., description="The crop from the input list most likely to be affected.")
    impact_analysis: str
    preventive_action: str = Field(..., description="One specific preventive action to take immediately.")
    image_hint: str = Field(..., description="Two keywords for a relevant image, e.g. 'wheat rust'.")
