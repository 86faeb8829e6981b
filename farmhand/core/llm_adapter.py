"""LLM adapter with Cerebras <-> Groq failover.

Constructed explicitly and injected into the flows; there is no module-level
client. A provider client is only built when its API key is set, so the
adapter always constructs and ``is_healthy`` reports what is usable.

``get_chat_model`` alternates which provider leads and wraps it with the
other as fallback. ``invoke_structured`` is the path for one-shot structured
calls: Cerebras first, Groq on timeout or 5xx, a 4xx fails immediately.
Photo diagnosis goes to the Groq vision model instead.
"""

import os
import threading

import structlog
from httpx import ReadTimeout
from langchain_cerebras import ChatCerebras
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.runnables import Runnable
from langchain_groq import ChatGroq

from farmhand.core.failures import http_status

logger = structlog.get_logger(__name__)


class LLMError(Exception):
    """Non-retryable LLM error (e.g. 4xx bad request)."""
    pass


class LLMUnavailableError(Exception):
    """No provider is configured, or every provider failed."""
    pass


class LLMAdapter:
    """Wraps Cerebras + Groq with automatic failover.

    Configuration comes from the environment: ``CEREBRAS_API_KEY``,
    ``GROQ_API_KEY``, ``CEREBRAS_MODEL``, ``GROQ_MODEL``, ``DIAGNOSIS_MODEL``,
    ``LLM_TEMPERATURE``, ``LLM_MAX_TOKENS`` and ``LLM_TIMEOUT``.
    """

    def __init__(self):
        self.cerebras_key = os.environ.get("CEREBRAS_API_KEY", "")
        self.groq_key = os.environ.get("GROQ_API_KEY", "")

        self.cerebras_model_name = os.environ.get("CEREBRAS_MODEL", "gpt-oss-120b")
        self.groq_model_name = os.environ.get("GROQ_MODEL", "openai/gpt-oss-120b")
        self.vision_model_name = os.environ.get(
            "DIAGNOSIS_MODEL", "meta-llama/llama-4-scout-17b-16e-instruct"
        )

        self.temperature = float(os.environ.get("LLM_TEMPERATURE", "0.3"))
        self.max_tokens = int(os.environ.get("LLM_MAX_TOKENS", "2048"))
        self.timeout = int(os.environ.get("LLM_TIMEOUT", "30"))

        self.primary_llm: BaseChatModel | None = None
        self.fallback_llm: BaseChatModel | None = None
        self.vision_llm: BaseChatModel | None = None

        if self.cerebras_key:
            self.primary_llm = ChatCerebras(
                api_key=self.cerebras_key,
                model=self.cerebras_model_name,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                timeout=self.timeout,
            )

        if self.groq_key:
            self.fallback_llm = self._groq(self.groq_model_name)
            self.vision_llm = self._groq(self.vision_model_name)

        self._turn = 0
        self._turn_lock = threading.Lock()

    def _groq(self, model: str) -> ChatGroq:
        return ChatGroq(
            api_key=self.groq_key,
            model=model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
        )

    def _candidates(self, vision: bool = False) -> list[tuple[str, BaseChatModel]]:
        """Configured models for a call, in the order they should be tried."""
        if vision:
            return [("groq-vision", self.vision_llm)] if self.vision_llm is not None else []
        pairs = [("cerebras", self.primary_llm), ("groq", self.fallback_llm)]
        return [(name, model) for name, model in pairs if model is not None]

    def get_chat_model(self) -> Runnable:
        """Return a chat model with failover, alternating the leading provider.

        Returns:
            ``RunnableWithFallbacks`` led by Cerebras on even calls and by Groq
            on odd calls, with the other provider as its fallback. With only
            one provider configured, that provider's model alone.

        Raises:
            LLMUnavailableError: If no provider is configured.
        """
        models = [model for _, model in self._candidates()]
        if not models:
            raise LLMUnavailableError("No LLM provider configured.")
        if len(models) == 1:
            return models[0]

        with self._turn_lock:
            turn = self._turn
            self._turn += 1

        lead, backup = models if turn % 2 == 0 else reversed(models)
        logger.debug("llm.select", lead=type(lead).__name__)
        return lead.with_fallbacks([backup])

    def is_healthy(self) -> bool:
        """Check if at least one provider has a key configured.

        Returns:
            True if either Cerebras or Groq API key is set.
        """
        return bool(self.cerebras_key) or bool(self.groq_key)

    def invoke_structured(self, schema, messages: list[BaseMessage], vision: bool = False):
        """Structured call, trying each configured provider in turn.

        Args:
            schema: Pydantic model the response must be parsed into.
            messages: LangChain messages to send.
            vision: Route to the vision model (messages carry an image part).

        Returns:
            An instance of ``schema``, or None if the model produced nothing parseable.

        Raises:
            LLMError: If a provider rejects the request with a 4xx (no fallback attempted).
            LLMUnavailableError: If no model is configured or every provider fails.
        """
        candidates = self._candidates(vision)
        if not candidates:
            raise LLMUnavailableError(
                "No vision model configured (GROQ_API_KEY is required)." if vision
                else "No LLM provider configured."
            )

        last_error = None
        for name, model in candidates:
            logger.debug("llm.invoke", provider=name, schema=schema.__name__)
            try:
                return model.with_structured_output(schema).invoke(messages)

            except ReadTimeout as e:
                logger.warning("llm.timeout_fallback", provider=name, threshold=self.timeout)
                last_error = e

            except Exception as e:
                status = http_status(e)
                # 429 is per-provider quota, not a bad request
                if status is not None and 400 <= status < 500 and status != 429:
                    logger.error("llm.4xx", provider=name, status=status)
                    raise LLMError(f"{name} rejected request ({status}): {e}") from e
                logger.warning("llm.provider_failed", provider=name, status=status, error=str(e))
                last_error = e

        logger.error("llm.all_failed", error=str(last_error))
        raise LLMUnavailableError(f"All LLM providers failed: {last_error}") from last_error
