# huno/services/credits_service.py
# 결제 게이트웨이 연동 없음: 구매는 transaction id 만 발급하는 시뮬레이션
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from huno.core.errors import InvalidAmount, InvalidPurchase, UnknownPackage, UserNotFound
from huno.models.registry import CreditPackage, get_package
from huno.services.user_store import UserRecord, UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseTicket:
    transaction_id: str
    package: CreditPackage
    payment_url: str


class CreditsService:
    def __init__(self, user_store: UserStore):
        self.user_store = user_store

    def start_purchase(self, package_id: Any, user_id: Any) -> PurchaseTicket:
        if not package_id or not user_id:
            raise InvalidPurchase()

        package = get_package(package_id)
        if package is None:
            raise UnknownPackage()

        transaction_id = str(uuid.uuid4())
        logger.info("simulated purchase %s: user=%s package=%s", transaction_id, user_id, package.id)
        return PurchaseTicket(
            transaction_id=transaction_id,
            package=package,
            payment_url=f"/api/credits/callback?transaction={transaction_id}",
        )

    def report_usage(self, user_id: str, amount: Any) -> UserRecord:
        """
        클라이언트가 보고한 사용량을 그대로 차감.
        실제 요청과 대조하지 않고, 잔액이 음수가 되는 것도 막지 않는다.
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise InvalidAmount()
        if self.user_store.get(user_id) is None:
            raise UserNotFound()
        return self.user_store.adjust_credits(user_id, -amount)
