# huno/services/otp_store.py
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class OTPChallenge:
    code: str
    expires_at: float  # epoch seconds


class OTPStore:
    """
    phone -> 대기중인 OTP 코드 저장소 (프로세스 메모리, 재시작하면 사라짐).

    get / set / delete 각각은 단일 dict 연산이지만 verify 흐름(get -> 비교 -> delete)
    전체를 묶는 락은 없다. 같은 번호로 verify 가 동시에 두 번 들어오면 둘 다
    삭제 전의 코드를 읽을 수 있음.
    """

    def __init__(self, ttl_sec: int = 120, clock: Callable[[], float] = time.time):
        self.ttl_sec = ttl_sec
        self.clock = clock
        self._data: Dict[str, OTPChallenge] = {}

    def now(self) -> float:
        return self.clock()

    def set(self, phone: str, code: str) -> OTPChallenge:
        # 이전 코드가 있으면 덮어씀
        challenge = OTPChallenge(code=code, expires_at=self.now() + self.ttl_sec)
        self._data[phone] = challenge
        return challenge

    def get(self, phone: str) -> Optional[OTPChallenge]:
        return self._data.get(phone)

    def delete(self, phone: str) -> None:
        self._data.pop(phone, None)

    def __len__(self) -> int:
        return len(self._data)
