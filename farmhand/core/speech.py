"""Text-to-speech for chat and diagnosis responses.

Wraps gTTS to produce MP3 audio as a ``data:audio/mpeg;base64,...`` URI.
Audio is always optional: callers go through ``synthesize_or_none`` so a
synthesis failure never fails the response it decorates.
"""

import base64
import io
import os
import re
from typing import Protocol

import structlog
from gtts import gTTS
from gtts.lang import tts_langs

from farmhand.api.schemas import AUDIO_DATA_URI_PATTERN, ChartResponse, ChatResponse, TextResponse

logger = structlog.get_logger(__name__)


class SpeechSynthesisError(Exception):
    """Speech backend failed to produce audio."""
    pass


class SpeechSynthesizer(Protocol):
    def synthesize(self, text: str, language: str) -> str:
        """Return an audio data URI for ``text`` spoken in ``language``."""
        ...


class GTTSSynthesizer:
    """gTTS-backed synthesizer.

    Reads ``TTS_TIMEOUT`` (seconds) and ``TTS_SLOW`` from the environment.
    """

    mime_type = "audio/mpeg"

    def __init__(self):
        self.timeout = float(os.environ.get("TTS_TIMEOUT", "15"))
        self.slow = os.environ.get("TTS_SLOW", "false").lower() == "true"

    def synthesize(self, text: str, language: str) -> str:
        """Synthesize ``text`` and return it as a base64 data URI.

        Args:
            text: What to say.
            language: Language code such as "en", "hi", "te" or "en-IN".

        Returns:
            ``data:audio/mpeg;base64,<payload>``.

        Raises:
            SpeechSynthesisError: If the language is unsupported or the request fails.
        """
        lang = _gtts_language(language)
        buf = io.BytesIO()
        try:
            gTTS(text=text, lang=lang, slow=self.slow, timeout=self.timeout).write_to_fp(buf)
        except Exception as e:
            raise SpeechSynthesisError(f"gTTS failed for lang={lang}: {e}") from e

        payload = base64.b64encode(buf.getvalue()).decode("utf-8")
        logger.debug("speech.ok", lang=lang, bytes=buf.tell())
        return f"data:{self.mime_type};base64,{payload}"


def _gtts_language(language: str) -> str:
    """Map a language tag onto a gTTS language code.

    Tags gTTS knows as-is ("zh-TW", "zh-CN") are kept; other locales fall
    back to their bare language ("en-IN" -> "en").
    """
    code = (language or "en").strip().replace("_", "-")
    supported = {lang.lower(): lang for lang in tts_langs()}
    if code.lower() in supported:
        return supported[code.lower()]
    return code.split("-")[0].lower() or "en"


def speakable_text(response: ChatResponse) -> str | None:
    """Text to read aloud for a response, or None to skip audio.

    Charts are spoken as "<title>. <description>" only when both are present.
    """
    if isinstance(response, TextResponse):
        return response.data or None
    if isinstance(response, ChartResponse):
        title = response.data.title
        description = response.data.description
        if title and description:
            return f"{title}. {description}"
    return None


def synthesize_or_none(synthesizer: SpeechSynthesizer | None, text: str | None, language: str) -> str | None:
    """Synthesize audio, logging and returning None on any failure."""
    if synthesizer is None or not text:
        return None
    try:
        audio = synthesizer.synthesize(text, language)
    except Exception as e:
        logger.error("speech.failed", error=str(e), language=language)
        return None

    if not isinstance(audio, str) or not re.match(AUDIO_DATA_URI_PATTERN, audio):
        logger.error("speech.invalid_audio", language=language)
        return None
    return audio
