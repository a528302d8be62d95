# huno/services/openrouter_service.py
# OpenRouter(OpenAI 호환 chat-completion) 호출 + 실패 시 fallback
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import httpx
from openai import AsyncOpenAI

from huno.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    """한 번의 백엔드 호출 대상 (모델 또는 페르소나)."""
    id: str
    display_name: str
    backend_model: str
    fallback: str
    system_prompt: Optional[str] = None
    max_tokens: int = 2048


@dataclass(frozen=True)
class BackendReply:
    content: str
    degraded: bool = False


class OpenRouterService:
    """
    target 하나당 chat-completion 요청 1회.
    - 재시도 없음 (max_retries=0)
    - 키 없음 / HTTP 에러 / 응답 파싱 실패 / timeout 모두 fallback 으로 흡수
    - fallback 응답은 degraded=True 로 구분
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._http_client = http_client
        self._client: Optional[AsyncOpenAI] = None

    @property
    def live(self) -> bool:
        return bool(self.settings.OPENROUTER_API_KEY)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.OPENROUTER_API_KEY,
                base_url=self.settings.OPENROUTER_BASE_URL,
                timeout=self.settings.BACKEND_TIMEOUT_SEC,
                max_retries=0,
                default_headers={
                    "HTTP-Referer": self.settings.APP_URL,
                    "X-Title": self.settings.APP_TITLE,
                },
                http_client=self._http_client,
            )
        return self._client

    async def complete(
        self,
        target: Target,
        messages: List[Dict[str, str]],
        title: Optional[str] = None,
    ) -> BackendReply:
        if not self.live:
            return BackendReply(content=target.fallback, degraded=True)

        request_messages: List[Dict[str, str]] = []
        if target.system_prompt:
            request_messages.append({"role": "system", "content": target.system_prompt})
        request_messages.extend(messages)

        try:
            resp = await self._get_client().chat.completions.create(
                model=target.backend_model,
                messages=request_messages,
                max_tokens=target.max_tokens,
                extra_headers={"X-Title": title} if title else None,
            )
            content = (resp.choices[0].message.content or "").strip()
        except Exception as e:
            logger.warning("OpenRouter call failed for %s (%s): %s", target.id, type(e).__name__, e)
            return BackendReply(content=target.fallback, degraded=True)

        if not content:
            logger.warning("OpenRouter returned empty content for %s", target.id)
            return BackendReply(content=target.fallback, degraded=True)

        return BackendReply(content=content)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
