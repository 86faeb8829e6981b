"""FastAPI application entry point.

Startup sequence: tools → LLM adapter → speech → chat orchestrator,
diagnoser and advisory generator. Each component is built once and shared;
none of them keeps per-request state.
"""

import os
from contextlib import asynccontextmanager

import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farmhand.agent.advisory import AdvisoryGenerator
from farmhand.agent.agent import LangGraphChatBackend
from farmhand.agent.chat import FarmhandChat
from farmhand.agent.diagnosis import FarmDiagnoser
from farmhand.agent.tools import build_registry
from farmhand.api.routes import router
from farmhand.core.llm_adapter import LLMAdapter
from farmhand.core.speech import GTTSSynthesizer

load_dotenv()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("startup.begin")

    registry = build_registry()
    app.state.registry = registry
    logger.info("startup.tools_registered", tools=registry.names)

    llm_adapter = LLMAdapter()
    app.state.llm_adapter = llm_adapter
    logger.info("startup.llm_initialized", healthy=llm_adapter.is_healthy())

    synthesizer = None
    if os.environ.get("TTS_ENABLED", "true").lower() == "true":
        synthesizer = GTTSSynthesizer()
    app.state.synthesizer = synthesizer
    logger.info("startup.speech_initialized", enabled=synthesizer is not None)

    if llm_adapter.is_healthy():
        app.state.chat = FarmhandChat(LangGraphChatBackend(llm_adapter), registry, synthesizer)
        app.state.diagnoser = FarmDiagnoser(llm_adapter, synthesizer)
        app.state.advisory = AdvisoryGenerator(llm_adapter)
        logger.info("startup.agent_created")
    else:
        app.state.chat = None
        app.state.diagnoser = None
        app.state.advisory = None
        logger.error("startup.agent_unavailable",
                     hint="Set CEREBRAS_API_KEY or GROQ_API_KEY in .env")

    logger.info("startup.complete")
    yield
    logger.info("shutdown.complete")


app = FastAPI(
    title="Farmhand API",
    description="Conversational farm assistant with weather, market and seed tools",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("CORS_ALLOW_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
