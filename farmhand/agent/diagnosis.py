"""Farm problem diagnosis from a description and an optional photo."""

import structlog
from langchain_core.messages import HumanMessage

from farmhand.agent.prompts import build_diagnosis_prompt
from farmhand.api.schemas import DiagnosisRequest, DiagnosisResponse, DiagnosisResult
from farmhand.core.llm_adapter import LLMAdapter
from farmhand.core.speech import SpeechSynthesizer, synthesize_or_none

logger = structlog.get_logger(__name__)


class DiagnosisError(Exception):
    """The model produced no usable diagnosis."""
    pass


def diagnosis_speech_text(result: DiagnosisResult) -> str:
    """Spoken summary of a diagnosis and its solution."""
    return (
        f"Diagnosis: {result.diagnosis.issue}. "
        f"Details: {result.diagnosis.details}. "
        f"Recommendation: {result.solution.recommendation}. "
        f"Here are the steps: {'. '.join(result.solution.steps)}"
    )


class FarmDiagnoser:
    """Runs the diagnosis prompt and attaches spoken audio when possible."""

    def __init__(self, llm_adapter: LLMAdapter, synthesizer: SpeechSynthesizer | None = None):
        self.llm_adapter = llm_adapter
        self.synthesizer = synthesizer

    def diagnose(self, request: DiagnosisRequest) -> DiagnosisResponse:
        """Diagnose the described problem.

        Args:
            request: Description (10-1000 chars), optional photo data URI, language.

        Returns:
            Diagnosis and solution, plus audio unless synthesis failed.

        Raises:
            DiagnosisError: If the model returned no structured output.
        """
        logger.info("diagnosis.request", desc_len=len(request.problem_description),
                    has_photo=request.photo_data_uri is not None, language=request.language)

        content = [{
            "type": "text",
            "text": build_diagnosis_prompt(request.problem_description, request.language),
        }]
        if request.photo_data_uri:
            content.append({"type": "image_url", "image_url": {"url": request.photo_data_uri}})

        output = self.llm_adapter.invoke_structured(
            DiagnosisResult, [HumanMessage(content=content)], vision=bool(request.photo_data_uri)
        )
        if output is None:
            raise DiagnosisError("Failed to generate a diagnosis from the model.")
        result = output if isinstance(output, DiagnosisResult) else DiagnosisResult.model_validate(output)

        audio = synthesize_or_none(self.synthesizer, diagnosis_speech_text(result), request.language)
        logger.info("diagnosis.response", issue=result.diagnosis.issue,
                    healthy=result.diagnosis.is_healthy, audio=audio is not None)
        return DiagnosisResponse(diagnosis=result.diagnosis, solution=result.solution, audio=audio)
