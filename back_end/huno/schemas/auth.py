from typing import Any, Optional

from pydantic import BaseModel

from huno.schemas.user import UserOut


# 형식 검증은 AuthService 에서 (에러 메시지를 한 곳에서 관리)
class SendOtpRequest(BaseModel):
    phone: Any = None


class SendOtpResponse(BaseModel):
    success: bool = True
    message: str
    devCode: Optional[str] = None  # 개발 환경 + EXPOSE_DEV_OTP 일 때만


class VerifyOtpRequest(BaseModel):
    phone: Any = None
    code: Any = None


class VerifyOtpResponse(BaseModel):
    success: bool = True
    user: UserOut
