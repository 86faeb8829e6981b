"""Classification of upstream failures for a chat turn.

A busy model service (HTTP 503) is turned into a polite apology the user can
act on. Anything else becomes a ChatProcessingError carrying the original
message, for the caller to show as an error state.
"""

import structlog

from farmhand.api.schemas import FinalTextResponse

logger = structlog.get_logger(__name__)

TRANSIENT_SIGNATURE = "503 Service Unavailable"
BUSY_MESSAGE = "I'm sorry, the AI service is currently very busy. Please try again in a moment."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while processing your request."


class ChatProcessingError(Exception):
    """A chat turn failed for a reason other than transient overload."""
    pass


def http_status(error: BaseException) -> int | None:
    """HTTP status carried by the error, if any (httpx or provider SDKs)."""
    status = getattr(error, "status_code", None)
    if isinstance(status, int):
        return status
    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def _error_chain(error: BaseException):
    """The error and its explicit causes (`raise ... from`), outermost first."""
    seen = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


def is_transient_overload(error: BaseException) -> bool:
    """True when the error, or an error it was explicitly raised from, signals a 503."""
    for err in _error_chain(error):
        if TRANSIENT_SIGNATURE in str(err):
            return True
        if http_status(err) == 503:
            return True
    return False


def busy_response() -> FinalTextResponse:
    """The fixed apology returned instead of a transient failure."""
    return FinalTextResponse(data=BUSY_MESSAGE, audio=None)


def to_processing_error(error: BaseException) -> ChatProcessingError:
    """Wrap a hard failure, keeping its original message."""
    return ChatProcessingError(str(error) or UNKNOWN_ERROR_MESSAGE)
