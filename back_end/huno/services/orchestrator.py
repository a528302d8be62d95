# huno/services/orchestrator.py
# 메시지 1개 -> 모델/페르소나 N개 호출 -> 입력 순서대로 응답 목록 + 크레딧 합계
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from huno.core.config import Settings
from huno.core.errors import EmptyMessage, InsufficientTargets
from huno.models.registry import (
    DEFAULT_MODE_ID,
    DEFAULT_MODEL_ID,
    AIModel,
    Persona,
    get_mode,
    get_model,
    get_persona,
)
from huno.services.fallback import model_fallback, persona_fallback
from huno.services.openrouter_service import BackendReply, OpenRouterService, Target

logger = logging.getLogger(__name__)

CHAT_ROLES = ("user", "assistant", "system")


@dataclass
class AgentReply:
    target_id: str
    content: str
    degraded: bool = False


@dataclass
class FanOutResult:
    responses: List[AgentReply] = field(default_factory=list)
    credits_used: int = 0


def _require_message(message: Any) -> str:
    if not isinstance(message, str) or not message:
        raise EmptyMessage()
    return message


def build_chat_history(history: Any, message: str, window: int) -> List[Dict[str, str]]:
    # 최근 window 개만, role/content 둘 다 있는 것만
    items: List[Dict[str, str]] = []
    if isinstance(history, list):
        for m in history[-window:]:
            if not isinstance(m, dict):
                continue
            role, content = m.get("role"), m.get("content")
            if role in CHAT_ROLES and isinstance(content, str) and content:
                items.append({"role": role, "content": content})
    items.append({"role": "user", "content": message})
    return items


def build_roundtable_history(history: Any, message: str, window: int) -> List[Dict[str, str]]:
    # 라운드테이블 기록은 persona 발언만 assistant, 나머지는 user
    items: List[Dict[str, str]] = []
    if isinstance(history, list):
        for m in history[-window:]:
            if not isinstance(m, dict):
                continue
            role, content = m.get("role"), m.get("content")
            if role and isinstance(content, str) and content:
                items.append({"role": "assistant" if role == "persona" else "user", "content": content})
    items.append({"role": "user", "content": message})
    return items


class Orchestrator:
    def __init__(self, backend: OpenRouterService, settings: Settings):
        self.backend = backend
        self.settings = settings

    async def _call_all(self, targets: List[Target], messages: List[Dict[str, str]], title: str) -> List[BackendReply]:
        if self.settings.FANOUT_CONCURRENT:
            # gather 는 입력 순서대로 결과를 돌려줌
            return list(await asyncio.gather(*(self.backend.complete(t, messages, title) for t in targets)))

        replies: List[BackendReply] = []
        for t in targets:
            replies.append(await self.backend.complete(t, messages, title))
        return replies

    def _model_target(self, model: AIModel, message: str, mode_id: str) -> Target:
        mode = get_mode(mode_id)
        return Target(
            id=model.id,
            display_name=model.name,
            backend_model=model.openrouter_id,
            fallback=model_fallback(model, message, mode_id),
            system_prompt=mode.system_prompt if mode else None,
            max_tokens=self.settings.CHAT_MAX_TOKENS,
        )

    def _persona_target(self, persona: Persona, message: str) -> Target:
        return Target(
            id=persona.id,
            display_name=persona.name,
            backend_model=self.settings.ROUNDTABLE_MODEL,
            fallback=persona_fallback(persona, message),
            system_prompt=persona.system_prompt,
            max_tokens=self.settings.ROUNDTABLE_MAX_TOKENS,
        )

    async def run_chat(
        self,
        message: Any,
        model_ids: Optional[List[str]] = None,
        mode_id: Optional[str] = None,
        history: Any = None,
    ) -> FanOutResult:
        message = _require_message(message)
        # 생략(None)일 때만 기본 모델, 빈 목록은 그대로 (호출 없음, 0 크레딧)
        if model_ids is None:
            model_ids = [DEFAULT_MODEL_ID]
        mode_id = mode_id or DEFAULT_MODE_ID

        # 모르는 id 는 조용히 건너뜀
        resolved = [m for m in (get_model(mid) for mid in model_ids) if m is not None]

        # 크레딧: 요청에 들어온 (알려진) 모델 전부의 비용 합
        # TODO: 서버 측 잔액 검증/차감은 아직 없음 (클라이언트가 보고한 사용량을 그대로 신뢰)
        credits_used = sum(m.credit_cost for m in resolved)

        mode = get_mode(mode_id)
        if mode and mode.multi_agent and len(resolved) > 1:
            called = resolved
        else:
            called = resolved[:1]

        if not called:
            logger.info("chat request without any known model: %s", model_ids)
            return FanOutResult(responses=[], credits_used=credits_used)

        messages = build_chat_history(history, message, self.settings.HISTORY_WINDOW)
        targets = [self._model_target(m, message, mode_id) for m in called]
        replies = await self._call_all(targets, messages, self.settings.APP_TITLE)

        return FanOutResult(
            responses=[AgentReply(t.id, r.content, r.degraded) for t, r in zip(targets, replies)],
            credits_used=credits_used,
        )

    async def run_roundtable(
        self,
        message: Any,
        persona_ids: Any,
        history: Any = None,
    ) -> FanOutResult:
        message = _require_message(message)
        if not isinstance(persona_ids, list) or len(persona_ids) < 2:
            raise InsufficientTargets()

        resolved = [p for p in (get_persona(pid) for pid in persona_ids) if p is not None]
        credits_used = len(resolved) * self.settings.ROUNDTABLE_CREDIT_COST

        messages = build_roundtable_history(history, message, self.settings.HISTORY_WINDOW)
        targets = [self._persona_target(p, message) for p in resolved]
        replies = await self._call_all(targets, messages, f"{self.settings.APP_TITLE} - Roundtable")

        return FanOutResult(
            responses=[AgentReply(t.id, r.content, r.degraded) for t, r in zip(targets, replies)],
            credits_used=credits_used,
        )
