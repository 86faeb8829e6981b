"""Shape validation for chat model output.

The model may answer with a bare string or a structured object. Strings
become text responses; anything else must match exactly one member of the
text/chart union.
"""

from collections.abc import Mapping

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from farmhand.api.schemas import ChatResponse, ModelReply

logger = structlog.get_logger(__name__)

_chat_response = TypeAdapter(ChatResponse)


class MalformedResponseError(Exception):
    """Model output is missing or matches neither response shape."""
    pass


def validate_model_output(raw) -> ChatResponse:
    """Coerce raw model output into a TextResponse or ChartResponse.

    Args:
        raw: A string, a mapping, a pydantic model (including the
            ``ModelReply`` envelope), or None.

    Returns:
        The validated response variant.

    Raises:
        MalformedResponseError: If output is absent or matches no variant.
    """
    if raw is None:
        raise MalformedResponseError("The model did not return a valid response.")

    if isinstance(raw, str):
        if not raw.strip():
            raise MalformedResponseError("The model did not return a valid response.")
        return _chat_response.validate_python({"type": "text", "data": raw})

    if isinstance(raw, ModelReply):
        raw = raw.reply
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)

    if not isinstance(raw, Mapping):
        logger.warning("validator.unsupported_output", kind=type(raw).__name__)
        raise MalformedResponseError("The response format was unexpected.")

    if "reply" in raw and "type" not in raw:
        raw = raw["reply"]

    try:
        return _chat_response.validate_python(raw)
    except ValidationError as e:
        logger.warning("validator.shape_mismatch", errors=e.error_count())
        raise MalformedResponseError("The response format was unexpected.") from e
