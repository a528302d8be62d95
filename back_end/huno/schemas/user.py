from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field


class UserOut(BaseModel):
    id: str
    phone: str
    credits: int
    createdAt: datetime
    updatedAt: datetime
    settings: Dict[str, Any] = Field(default_factory=dict)


class UsageRequest(BaseModel):
    # 서버는 이 값을 검증하지 않고 그대로 차감
    amount: Any = None
