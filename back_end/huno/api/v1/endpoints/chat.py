from fastapi import APIRouter, Depends

from huno.api.deps import get_orchestrator
from huno.schemas.chat import (
    ChatRequest, ChatResponse, ModelReply,
    RoundtableRequest, RoundtableResponse, PersonaReply,
)
from huno.services.orchestrator import Orchestrator

router = APIRouter()


def _history(items) -> list:
    return list(items) if items else []


@router.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest, orchestrator: Orchestrator = Depends(get_orchestrator)):
    result = await orchestrator.run_chat(
        message=payload.message,
        model_ids=payload.models,
        mode_id=payload.mode,
        history=_history(payload.history),
    )
    return ChatResponse(
        responses=[ModelReply(model=r.target_id, content=r.content, degraded=r.degraded) for r in result.responses],
        creditsUsed=result.credits_used,
    )


@router.post("/roundtable", response_model=RoundtableResponse)
async def roundtable(payload: RoundtableRequest, orchestrator: Orchestrator = Depends(get_orchestrator)):
    result = await orchestrator.run_roundtable(
        message=payload.message,
        persona_ids=payload.personas,
        history=_history(payload.history),
    )
    return RoundtableResponse(
        responses=[PersonaReply(personaId=r.target_id, content=r.content, degraded=r.degraded) for r in result.responses],
        creditsUsed=result.credits_used,
    )
