# huno/services/auth_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from huno.core.errors import CodeMismatch, Expired, InvalidCode, InvalidPhone, NoPendingChallenge
from huno.services.otp_store import OTPStore
from huno.services.user_store import UserRecord, UserStore
from huno.utils.phone import format_phone, generate_otp, validate_phone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedChallenge:
    phone: str
    code: str
    expires_at: float


class AuthService:
    def __init__(
        self,
        otp_store: OTPStore,
        user_store: UserStore,
        welcome_credits: int = 50,
        code_factory: Callable[[], str] = generate_otp,
    ):
        self.otp_store = otp_store
        self.user_store = user_store
        self.welcome_credits = welcome_credits
        self.code_factory = code_factory

    def send_otp(self, phone: Any) -> IssuedChallenge:
        if not validate_phone(phone):
            raise InvalidPhone()

        code = self.code_factory()
        challenge = self.otp_store.set(phone, code)

        # SMS 게이트웨이 연동 전까지는 로그로만 확인
        logger.debug("[DEV] OTP for %s: %s", format_phone(phone), code)
        return IssuedChallenge(phone=phone, code=code, expires_at=challenge.expires_at)

    def verify_otp(self, phone: Any, code: Any) -> UserRecord:
        if not validate_phone(phone):
            raise InvalidPhone()
        if not isinstance(code, str) or len(code) != 6:
            raise InvalidCode()

        stored = self.otp_store.get(phone)
        if stored is None:
            raise NoPendingChallenge()

        if self.otp_store.now() > stored.expires_at:
            self.otp_store.delete(phone)
            raise Expired()

        if stored.code != code:
            raise CodeMismatch()

        # 1회용
        self.otp_store.delete(phone)

        user, created = self.user_store.get_or_create(phone, self.welcome_credits)
        if created:
            logger.info("new user %s (%s) registered with %d credits", user.id, format_phone(phone), user.credits)
        return user
