from pydantic import BaseModel
from typing import Any, Optional, List


class ChatRequest(BaseModel):
    message: Any = None
    models: Optional[List[str]] = None
    mode: Optional[str] = None
    history: Optional[List[Any]] = None  # 불완전한 항목은 orchestrator 가 걸러냄


class ModelReply(BaseModel):
    model: str
    content: str
    degraded: bool = False  # True 면 fallback(데모) 응답


class ChatResponse(BaseModel):
    success: bool = True
    responses: List[ModelReply]
    creditsUsed: int


class RoundtableRequest(BaseModel):
    message: Any = None
    personas: Any = None
    history: Optional[List[Any]] = None  # 불완전한 항목은 orchestrator 가 걸러냄


class PersonaReply(BaseModel):
    personaId: str
    content: str
    degraded: bool = False


class RoundtableResponse(BaseModel):
    success: bool = True
    responses: List[PersonaReply]
    creditsUsed: int
