from fastapi import APIRouter, Depends

from huno.api.deps import get_credits_service
from huno.models.registry import CREDIT_PACKAGES
from huno.schemas.credits import PackageOut, PackagesResponse, PurchaseRequest, PurchaseResponse
from huno.services.credits_service import CreditsService

router = APIRouter()


@router.get("", response_model=PackagesResponse)
def list_packages():
    return PackagesResponse(packages=[PackageOut(**p.as_dict()) for p in CREDIT_PACKAGES])


@router.post("", response_model=PurchaseResponse)
def purchase(payload: PurchaseRequest, credits: CreditsService = Depends(get_credits_service)):
    # 결제 게이트웨이(ZarinPal 등) 연동 전: transaction id 만 발급
    ticket = credits.start_purchase(payload.packageId, payload.userId)
    return PurchaseResponse(
        transactionId=ticket.transaction_id,
        package=PackageOut(**ticket.package.as_dict()),
        paymentUrl=ticket.payment_url,
    )
