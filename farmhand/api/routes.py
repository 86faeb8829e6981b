"""FastAPI endpoints for the Farmhand API.

POST /chat - one conversational turn (text or chart, optional audio)
POST /diagnose - diagnose a farm problem from a description and photo
POST /advisory - proactive risk advisory for a farm
POST /tools/{name} - call a farm tool directly (dashboard, market page)
GET /health - component health check
"""

import time
from typing import Any

import structlog
from fastapi import APIRouter, Body, HTTPException, Request
from pydantic import ValidationError

from farmhand.agent.advisory import AdvisoryError
from farmhand.agent.diagnosis import DiagnosisError
from farmhand.api.schemas import (
    Advisory,
    AdvisoryRequest,
    ChatRequest,
    DiagnosisRequest,
    DiagnosisResponse,
    FinalResponse,
)
from farmhand.core.failures import ChatProcessingError
from farmhand.core.llm_adapter import LLMError, LLMUnavailableError
from farmhand.core.registry import ToolOutputError, UnknownToolError

logger = structlog.get_logger(__name__)

router = APIRouter()


def _require(req: Request, name: str):
    component = getattr(req.app.state, name, None)
    if component is None:
        raise HTTPException(status_code=503, detail="Agent not available. Configure LLM API keys in .env and restart.")
    return component


@router.post("/chat", response_model=FinalResponse, response_model_by_alias=True)
def chat(request: ChatRequest, req: Request):
    """Run one chat turn through the orchestrator."""
    start = time.monotonic()
    orchestrator = _require(req, "chat")

    try:
        response = orchestrator.respond(request)
    except ChatProcessingError as e:
        raise HTTPException(status_code=500, detail=str(e))

    latency_ms = int((time.monotonic() - start) * 1000)
    logger.info("api.chat", latency_ms=latency_ms, type=response.type)
    return response


@router.post("/diagnose", response_model=DiagnosisResponse, response_model_by_alias=True)
def diagnose(request: DiagnosisRequest, req: Request):
    """Diagnose a crop or soil problem."""
    diagnoser = _require(req, "diagnoser")
    try:
        return diagnoser.diagnose(request)
    except (DiagnosisError, LLMError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    except LLMUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error("api.diagnose_failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e) or "Diagnosis failed.")


@router.post("/advisory", response_model=Advisory, response_model_by_alias=True)
def advisory(request: AdvisoryRequest, req: Request):
    """Generate a proactive advisory."""
    generator = _require(req, "advisory")
    try:
        return generator.generate(request)
    except (AdvisoryError, LLMError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    except LLMUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error("api.advisory_failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e) or "Advisory generation failed.")


@router.post("/tools/{name}")
def invoke_tool(name: str, req: Request, arguments: dict[str, Any] = Body(default_factory=dict)):
    """Call a registered tool with JSON arguments."""
    registry = req.app.state.registry
    try:
        result = registry.invoke(name, arguments)
    except UnknownToolError:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    except ToolOutputError as e:
        logger.error("api.tool_failed", tool=name, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))

    return {"tool": name, "result": result}


@router.get("/health")
def health(req: Request):
    """Check health of backend components."""
    components = {}

    llm = req.app.state.llm_adapter
    components["cerebras"] = "ok" if llm.cerebras_key else "error"
    components["groq"] = "ok" if llm.groq_key else "error"
    components["speech"] = "ok" if req.app.state.synthesizer is not None else "disabled"

    errors = [k for k, v in components.items() if v == "error"]
    if not errors:
        status = "healthy"
    elif len(errors) == 2:
        status = "unhealthy"
    else:
        status = "degraded"

    return {"status": status, "components": components, "tools": req.app.state.registry.names}


@router.get("/")
@router.head("/")
def root_health():
    """Basic root health check for deployment platforms."""
    return {"status": "ok", "service": "farmhand-api"}
