from fastapi import APIRouter, Depends

from huno.api.deps import get_auth_service, get_settings
from huno.core.config import Settings
from huno.schemas.auth import SendOtpRequest, SendOtpResponse, VerifyOtpRequest, VerifyOtpResponse
from huno.schemas.user import UserOut
from huno.services.auth_service import AuthService

router = APIRouter()


@router.post("/send-otp", response_model=SendOtpResponse, response_model_exclude_none=True)
def send_otp(
    payload: SendOtpRequest,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    issued = auth.send_otp(payload.phone)
    return SendOtpResponse(
        message="کد تایید ارسال شد",
        # 운영 빌드에서는 절대 내려가지 않음
        devCode=issued.code if settings.expose_dev_otp else None,
    )


@router.post("/verify-otp", response_model=VerifyOtpResponse)
def verify_otp(payload: VerifyOtpRequest, auth: AuthService = Depends(get_auth_service)):
    user = auth.verify_otp(payload.phone, payload.code)
    return VerifyOtpResponse(user=UserOut(**user.as_dict()))
