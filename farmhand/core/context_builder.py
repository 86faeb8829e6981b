"""Request normalization and history assembly for agent invocation.

Turns raw UI input into a ChatRequest, then converts its conversation history
into LangChain messages under a token budget (oldest turns dropped first).

Tool turns are forwarded as already-summarized assistant text rather than
``ToolMessage``s: a ToolMessage must answer a tool call in the same request,
and history from the UI carries no such pairing.
"""

import os

import structlog
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from farmhand.api.schemas import ChatRequest, ConversationTurn

logger = structlog.get_logger(__name__)

TOOL_RESULT_PREFIX = "Tool result: "


def normalize_request(
    message: str,
    history: list[ConversationTurn | dict] | None = None,
    language: str | None = None,
) -> ChatRequest:
    """Build a typed request from raw input.

    Args:
        message: The user's message; must be non-empty after stripping.
        history: Prior turns, oldest first. None means no history.
        language: Response language code. None or blank means "en".

    Returns:
        Validated ChatRequest.

    Raises:
        pydantic.ValidationError: If the message is empty.
    """
    return ChatRequest.model_validate({
        "message": message,
        "history": history,
        "language": language,
    })


def _estimate_tokens(text: str) -> int:
    """Rough token estimate: ~4 chars per token."""
    return len(text) // 4


def turn_to_message(turn: ConversationTurn) -> BaseMessage | None:
    """Map one history turn onto a LangChain message, or None if it has no text."""
    text = turn.text().strip()
    if not text:
        return None
    if turn.role == "user":
        return HumanMessage(content=text)
    if turn.role == "model":
        return AIMessage(content=text)
    return AIMessage(content=f"{TOOL_RESULT_PREFIX}{text}")


def build_history_messages(
    history: list[ConversationTurn],
    token_budget: int | None = None,
) -> list[BaseMessage]:
    """Convert history to messages, keeping the newest turns that fit the budget.

    Args:
        history: Turns in chronological order.
        token_budget: Max estimated tokens across kept turns. Defaults to
            ``HISTORY_TOKEN_BUDGET`` (3000).

    Returns:
        Messages in chronological order.
    """
    if token_budget is None:
        token_budget = int(os.environ.get("HISTORY_TOKEN_BUDGET", "3000"))

    messages = [m for m in (turn_to_message(t) for t in history) if m is not None]

    kept: list[BaseMessage] = []
    total = 0
    for msg in reversed(messages):
        cost = _estimate_tokens(msg.content)
        if total + cost > token_budget:
            break
        kept.append(msg)
        total += cost
    kept.reverse()

    if len(kept) < len(messages):
        logger.warning("context.token_budget_exceeded", original=len(messages),
                       kept=len(kept), budget=token_budget)
    return kept
