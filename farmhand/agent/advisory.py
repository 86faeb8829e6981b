"""Proactive advisory: the single most likely near-term risk for a farm."""

import structlog
from langchain_core.messages import HumanMessage

from farmhand.agent.prompts import build_advisory_prompt
from farmhand.api.schemas import Advisory, AdvisoryRequest
from farmhand.core.llm_adapter import LLMAdapter

logger = structlog.get_logger(__name__)


class AdvisoryError(Exception):
    """The model produced no usable advisory."""
    pass


class AdvisoryGenerator:

    def __init__(self, llm_adapter: LLMAdapter):
        self.llm_adapter = llm_adapter

    def generate(self, request: AdvisoryRequest) -> Advisory:
        """Generate an advisory for the farm described by ``request``.

        Raises:
            AdvisoryError: If the model returned no structured output.
        """
        logger.info("advisory.request", location=request.location,
                    crops=request.crops, language=request.language)

        prompt = build_advisory_prompt(request.location, request.crops, request.soil_type, request.language)
        output = self.llm_adapter.invoke_structured(Advisory, [HumanMessage(content=prompt)])
        if output is None:
            raise AdvisoryError("Failed to generate an advisory from the model.")

        advisory = output if isinstance(output, Advisory) else Advisory.model_validate(output)
        logger.info("advisory.response", urgency=advisory.urgency, risk=advisory.risk_probability)
        return advisory
