from fastapi import APIRouter, Depends

from huno.api.deps import get_credits_service, get_user_store
from huno.core.errors import UserNotFound
from huno.schemas.user import UsageRequest, UserOut
from huno.services.credits_service import CreditsService
from huno.services.user_store import UserStore

router = APIRouter()


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, users: UserStore = Depends(get_user_store)):
    user = users.get(user_id)
    if user is None:
        raise UserNotFound()
    return UserOut(**user.as_dict())


@router.post("/{user_id}/credits/usage", response_model=UserOut)
def report_usage(
    user_id: str,
    payload: UsageRequest,
    credits: CreditsService = Depends(get_credits_service),
):
    user = credits.report_usage(user_id, payload.amount)
    return UserOut(**user.as_dict())
