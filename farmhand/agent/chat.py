"""End-to-end chat turn: normalize, invoke the model, validate, add speech.

One model call and at most one speech call per turn, strictly in that order.
The orchestrator keeps no per-conversation state, so a single instance can
serve concurrent requests.
"""

import structlog
from pydantic import TypeAdapter

from farmhand.agent.agent import ChatModelBackend
from farmhand.agent.prompts import build_chat_system_prompt
from farmhand.api.schemas import ChatRequest, ChatResponse, FinalResponse
from farmhand.core.context_builder import build_history_messages
from farmhand.core.failures import busy_response, is_transient_overload, to_processing_error
from farmhand.core.registry import ToolRegistry
from farmhand.core.speech import SpeechSynthesizer, speakable_text, synthesize_or_none
from farmhand.core.validator import validate_model_output

logger = structlog.get_logger(__name__)

_final_response = TypeAdapter(FinalResponse)


def attach_audio(response: ChatResponse, audio: str | None) -> FinalResponse:
    """Promote a validated response to its final form, with optional audio."""
    payload = response.model_dump(by_alias=True)
    payload["audio"] = audio
    return _final_response.validate_python(payload)


class FarmhandChat:
    """Chat orchestrator.

    Args:
        backend: Model backend that runs the tool-calling turn.
        registry: Tools offered to the model.
        synthesizer: Speech backend; None disables audio.
    """

    def __init__(
        self,
        backend: ChatModelBackend,
        registry: ToolRegistry,
        synthesizer: SpeechSynthesizer | None = None,
    ):
        self.backend = backend
        self.registry = registry
        self.synthesizer = synthesizer
        self._tools = registry.as_langchain_tools()

    def respond(self, request: ChatRequest) -> FinalResponse:
        """Produce the reply for one user turn.

        Args:
            request: Normalized chat request.

        Returns:
            A text or chart response, with audio when synthesis succeeded,
            or the busy apology when the model service is overloaded.

        Raises:
            ChatProcessingError: For any other failure, with the original message.
        """
        logger.info("chat.request", msg_len=len(request.message),
                    history=len(request.history), language=request.language)
        try:
            raw = self.backend.generate(
                system_prompt=build_chat_system_prompt(request.language),
                message=request.message,
                history=build_history_messages(request.history),
                language=request.language,
                tools=self._tools,
            )
            response = validate_model_output(raw)
            audio = synthesize_or_none(self.synthesizer, speakable_text(response), request.language)
            final = attach_audio(response, audio)

        except Exception as e:
            if is_transient_overload(e):
                logger.warning("chat.transient_fallback", error=str(e))
                return busy_response()
            logger.error("chat.failed", error=str(e), error_type=type(e).__name__)
            raise to_processing_error(e) from e

        logger.info("chat.response", type=final.type, audio=final.audio is not None)
        return final
