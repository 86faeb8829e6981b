"""LangGraph agent factory and the chat model backend built on it.

Wires together the LLM adapter, the farm tools, and the system prompt into a
ReAct agent whose final answer is forced into the text/chart reply schema.
"""

from typing import Any, Protocol

import structlog
from langchain_core.messages import BaseMessage, HumanMessage
from langchain_core.tools import BaseTool
from langgraph.prebuilt import create_react_agent

from farmhand.api.schemas import ModelReply
from farmhand.core.llm_adapter import LLMAdapter

logger = structlog.get_logger(__name__)

RECURSION_LIMIT = 10


class ChatModelBackend(Protocol):
    def generate(
        self,
        *,
        system_prompt: str,
        message: str,
        history: list[BaseMessage],
        language: str,
        tools: list[BaseTool],
    ) -> Any:
        """Run one model turn; may call tools. Returns a string, a mapping, a model, or None."""
        ...


def create_agent(llm_adapter: LLMAdapter, tools: list[BaseTool], system_prompt: str):
    """Build the ReAct agent graph.

    Args:
        llm_adapter: Initialized LLM adapter with failover.
        tools: LangChain tools the model may call.
        system_prompt: Fully rendered system prompt.

    Returns:
        Compiled LangGraph state graph, ready to invoke.
    """
    model = llm_adapter.get_chat_model()
    agent = create_react_agent(
        model=model,
        tools=tools,
        prompt=system_prompt,
        response_format=ModelReply,
    )
    logger.debug("agent.created", tools=[t.name for t in tools])
    return agent


class LangGraphChatBackend:
    """ChatModelBackend running a fresh ReAct agent per turn.

    The graph is compiled per call because the system prompt carries the
    turn's language; compiling is cheap next to the model round-trips.
    """

    def __init__(self, llm_adapter: LLMAdapter):
        self.llm_adapter = llm_adapter

    def generate(
        self,
        *,
        system_prompt: str,
        message: str,
        history: list[BaseMessage],
        language: str,
        tools: list[BaseTool],
    ) -> Any:
        agent = create_agent(self.llm_adapter, tools, system_prompt)
        messages = [*history, HumanMessage(content=message)]

        result = agent.invoke({"messages": messages}, config={"recursion_limit": RECURSION_LIMIT})
        tools_called = _tools_called(result)
        logger.info("agent.turn_complete", language=language, tools=tools_called)

        structured = result.get("structured_response")
        if structured is not None:
            return structured

        # No structured answer; fall back to the final plain AI message.
        for msg in reversed(result.get("messages", [])):
            if getattr(msg, "type", "") == "ai" and not getattr(msg, "tool_calls", None):
                return msg.content if isinstance(msg.content, str) else None
        return None


def _tools_called(result: dict) -> list[str]:
    names = []
    for msg in result.get("messages", []):
        for tc in getattr(msg, "tool_calls", None) or []:
            names.append(tc.get("name", "unknown"))
    return names
