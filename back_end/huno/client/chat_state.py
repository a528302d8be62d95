# huno/client/chat_state.py
# 채팅 UI 상태 (대화 기록 / 선택된 모델·페르소나 / 모드 / 로그인 상태)
# 단일 UI 스레드에서 쓰는 전제라 동시성 처리 없음
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from huno.models.registry import DEFAULT_MODE_ID, DEFAULT_MODEL_ID

logger = logging.getLogger(__name__)

GENERIC_ERROR_TEXT = "متأسفانه خطایی رخ داد. لطفاً دوباره تلاش کنید."
INSUFFICIENT_CREDITS_TEXT = "اعتبار شما کافی نیست. لطفاً اعتبار خود را شارژ کنید."


@dataclass(frozen=True)
class Message:
    role: str  # "user" | "assistant" | "system"
    content: str
    model: Optional[str] = None
    persona: Optional[str] = None
    degraded: bool = False
    chat_id: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_history(self) -> Dict[str, str]:
        # 라운드테이블 기록은 persona 발언을 "persona" role 로 보냄
        role = "persona" if self.persona else self.role
        return {"role": role, "content": self.content}


class AuthRequired(Exception):
    """로그인 모달을 띄워야 하는 상황."""


class ChatState:
    def __init__(self, http: httpx.Client, history_window: int = 10):
        self.http = http
        self.history_window = history_window

        self.user: Optional[Dict[str, Any]] = None
        self.messages: List[Message] = []
        self.selected_models: List[str] = [DEFAULT_MODEL_ID]
        self.selected_personas: List[str] = []
        self.current_mode: str = DEFAULT_MODE_ID
        self.is_loading = False

    # ---------- auth ----------
    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def send_otp(self, phone: str) -> Dict[str, Any]:
        res = self.http.post("/api/auth/send-otp", json={"phone": phone})
        data = res.json()
        if res.status_code != 200:
            raise ValueError(data.get("error") or "خطا در ارسال کد")
        return data

    def verify_otp(self, phone: str, code: str) -> Dict[str, Any]:
        res = self.http.post("/api/auth/verify-otp", json={"phone": phone, "code": code})
        data = res.json()
        if res.status_code != 200:
            raise ValueError(data.get("error") or "کد نادرست است")
        self.user = data["user"]
        return self.user

    def logout(self) -> None:
        self.user = None
        self.messages = []

    # ---------- selection ----------
    def set_selected_models(self, model_ids: List[str]) -> None:
        self.selected_models = list(model_ids)

    def set_selected_personas(self, persona_ids: List[str]) -> None:
        self.selected_personas = list(persona_ids)

    def set_mode(self, mode_id: str) -> None:
        self.current_mode = mode_id

    def requires_authentication(self) -> bool:
        if self.is_authenticated:
            return False
        # chat 이외 모드는 항상 로그인 필요, chat 은 첫 메시지부터 필요
        if self.current_mode != "chat":
            return True
        return len(self.messages) == 0

    def update_credits(self, credits: int) -> None:
        if self.user is not None:
            self.user = {**self.user, "credits": credits}

    # ---------- submit ----------
    def _history(self) -> List[Dict[str, str]]:
        return [m.as_history() for m in self.messages[-self.history_window:]]

    def _append_error(self, error: Optional[str] = None) -> None:
        text = INSUFFICIENT_CREDITS_TEXT if error == "insufficient_credits" else GENERIC_ERROR_TEXT
        self.messages.append(Message(role="assistant", content=text))

    def _post(self, path: str, body: dict) -> Optional[dict]:
        # 실패하면 에러 메시지 1개 추가 후 None (낙관적으로 넣은 user 메시지는 그대로 둠)
        try:
            res = self.http.post(path, json=body)
            data = res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("request to %s failed: %s", path, e)
            self._append_error()
            return None

        if not isinstance(data, dict):
            self._append_error()
            return None
        if res.status_code != 200 or not data.get("success"):
            self._append_error(data.get("error"))
            return None
        return data

    def _charge(self, credits_used: int) -> None:
        if not credits_used or self.user is None:
            return
        self.update_credits(self.user["credits"] - credits_used)

        # 서버 잔액도 같은 값만큼 차감 요청 (서버는 검증하지 않음)
        try:
            res = self.http.post(f"/api/users/{self.user['id']}/credits/usage", json={"amount": credits_used})
            res.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("credit usage report failed for %s: %s", self.user["id"], e)

    def submit(self, text: str) -> List[Message]:
        """chat 전송. 추가된 assistant 메시지 목록을 반환."""
        text = (text or "").strip()
        if not text or self.is_loading:
            return []
        if self.requires_authentication():
            raise AuthRequired()

        history = self._history()
        self.messages.append(Message(role="user", content=text))
        self.is_loading = True
        try:
            data = self._post("/api/chat", {
                "message": text,
                "models": self.selected_models,
                "mode": self.current_mode,
                "history": history,
            })
            if data is None:
                return []

            added = [
                Message(role="assistant", content=r["content"], model=r.get("model"), degraded=r.get("degraded", False))
                for r in data.get("responses", [])
            ]
            self.messages.extend(added)
            self._charge(data.get("creditsUsed", 0))
            return added
        finally:
            self.is_loading = False

    def submit_roundtable(self, text: str) -> List[Message]:
        text = (text or "").strip()
        if not text or self.is_loading:
            return []
        if not self.is_authenticated:
            raise AuthRequired()

        history = self._history()
        self.messages.append(Message(role="user", content=text))
        self.is_loading = True
        try:
            data = self._post("/api/roundtable", {
                "message": text,
                "personas": self.selected_personas,
                "history": history,
            })
            if data is None:
                return []

            added = [
                Message(role="assistant", content=r["content"], persona=r.get("personaId"), degraded=r.get("degraded", False))
                for r in data.get("responses", [])
            ]
            self.messages.extend(added)
            self._charge(data.get("creditsUsed", 0))
            return added
        finally:
            self.is_loading = False
