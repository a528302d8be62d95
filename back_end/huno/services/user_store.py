# huno/services/user_store.py
from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from huno.core.errors import UserNotFound
from huno.db.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UserRecord:
    id: str
    phone: str
    credits: int
    created_at: datetime
    updated_at: datetime
    settings: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "phone": self.phone,
            "credits": self.credits,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "settings": dict(self.settings),
        }


class UserStore(ABC):
    """phone 으로 키잉된 사용자 저장소 인터페이스."""

    @abstractmethod
    def get(self, user_id: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_by_phone(self, phone: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def create(self, phone: str, credits: int) -> UserRecord: ...

    @abstractmethod
    def adjust_credits(self, user_id: str, delta: int) -> UserRecord: ...

    def get_or_create(self, phone: str, initial_credits: int) -> Tuple[UserRecord, bool]:
        user = self.get_by_phone(phone)
        if user is not None:
            return user, False
        return self.create(phone, initial_credits), True


class InMemoryUserStore(UserStore):
    """프로세스 메모리 저장소 (기본값). 락 없음."""

    def __init__(self):
        self._by_phone: Dict[str, UserRecord] = {}
        self._phone_by_id: Dict[str, str] = {}

    def get(self, user_id: str) -> Optional[UserRecord]:
        phone = self._phone_by_id.get(user_id)
        return self._by_phone.get(phone) if phone else None

    def get_by_phone(self, phone: str) -> Optional[UserRecord]:
        return self._by_phone.get(phone)

    def create(self, phone: str, credits: int) -> UserRecord:
        now = _utcnow()
        user = UserRecord(
            id=str(uuid.uuid4()),
            phone=phone,
            credits=credits,
            created_at=now,
            updated_at=now,
            settings={},
        )
        self._by_phone[phone] = user
        self._phone_by_id[user.id] = phone
        return user

    def adjust_credits(self, user_id: str, delta: int) -> UserRecord:
        user = self.get(user_id)
        if user is None:
            raise UserNotFound()
        updated = replace(user, credits=user.credits + delta, updated_at=_utcnow())
        self._by_phone[user.phone] = updated
        return updated


def _aware(dt: datetime) -> datetime:
    # sqlite 는 tzinfo 를 버리므로 UTC 로 복원
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def _to_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        phone=row.phone,
        credits=row.credits,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
        settings=dict(row.settings or {}),
    )


class SqlUserStore(UserStore):
    """DATABASE_URL 이 설정된 경우 사용하는 SQLAlchemy 저장소."""

    def __init__(self, session_factory: sessionmaker):
        self._sessions = session_factory

    def get(self, user_id: str) -> Optional[UserRecord]:
        with self._sessions() as db:
            row = db.get(User, user_id)
            return _to_record(row) if row else None

    def get_by_phone(self, phone: str) -> Optional[UserRecord]:
        with self._sessions() as db:
            row = db.execute(select(User).where(User.phone == phone)).scalar_one_or_none()
            return _to_record(row) if row else None

    def create(self, phone: str, credits: int) -> UserRecord:
        with self._sessions() as db:
            row = User(phone=phone, credits=credits, settings={})
            db.add(row)
            try:
                db.commit()
            except IntegrityError:
                # 같은 번호가 먼저 들어간 경우 기존 사용자를 돌려줌
                db.rollback()
                existing = db.execute(select(User).where(User.phone == phone)).scalar_one()
                return _to_record(existing)
            db.refresh(row)
            return _to_record(row)

    def adjust_credits(self, user_id: str, delta: int) -> UserRecord:
        with self._sessions() as db:
            row = db.get(User, user_id)
            if row is None:
                raise UserNotFound()
            row.credits = row.credits + delta
            db.commit()
            db.refresh(row)
            return _to_record(row)
