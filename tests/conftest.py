"""Shared fixtures for all tests."""

import random

import pytest

from farmhand.agent.tools import build_registry

FAKE_AUDIO = "data:audio/mpeg;base64,SUQzBAAAAAAAI1RTU0UAAAAPAAADTGF2ZjU4Ljc2LjEwMAAAAAAAAAAAAAAA"


class FakeSynthesizer:
    """Records calls; returns a fixed data URI or raises ``error``."""

    def __init__(self, audio: str = FAKE_AUDIO, error: Exception | None = None):
        self.audio = audio
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def synthesize(self, text: str, language: str) -> str:
        self.calls.append((text, language))
        if self.error is not None:
            raise self.error
        return self.audio


class FakeBackend:
    """ChatModelBackend returning a canned output or raising ``error``."""

    def __init__(self, output=None, error: Exception | None = None):
        self.output = output
        self.error = error
        self.calls: list[dict] = []

    def generate(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def synthesizer() -> FakeSynthesizer:
    return FakeSynthesizer()


@pytest.fixture
def failing_synthesizer() -> FakeSynthesizer:
    return FakeSynthesizer(error=TimeoutError("tts timed out"))


@pytest.fixture
def chart_payload() -> dict:
    return {
        "type": "chart",
        "data": {
            "title": "7-Day Temperature Forecast for Guntur",
            "description": "Average daily temperature in °C for the coming week.",
            "chartType": "bar",
            "data": [
                {"name": "2025-06-01", "value": 31},
                {"name": "2025-06-02", "value": 29.5},
                {"name": "2025-06-03", "value": 30},
            ],
        },
    }


@pytest.fixture
def sample_history() -> list[dict]:
    return [
        {"role": "user", "content": [{"text": "What's the weather in Guntur?"}]},
        {"role": "tool", "content": [{"toolResponse": {"name": "get_weather"}, "data": [{"temperature": 30}]}]},
        {"role": "model", "content": "It is sunny and 30°C in Guntur today."},
    ]


@pytest.fixture
def make_backend():
    return FakeBackend


@pytest.fixture
def make_synthesizer():
    return FakeSynthesizer
