# 정적 레지스트리 조회용 (클라이언트 모델/페르소나 선택 화면)
from fastapi import APIRouter

from huno.models.registry import AI_MODELS, CHAT_MODES, PERSONAS

router = APIRouter()


@router.get("/models")
def list_models():
    return {"models": [m.as_dict() for m in AI_MODELS]}


@router.get("/modes")
def list_modes():
    return {"modes": [m.as_dict() for m in CHAT_MODES]}


@router.get("/personas")
def list_personas():
    return {"personas": [p.as_dict() for p in PERSONAS]}
