from typing import Any, List

from pydantic import BaseModel


class PackageOut(BaseModel):
    id: str
    name: str
    credits: int
    price: int
    popular: bool = False


class PackagesResponse(BaseModel):
    packages: List[PackageOut]


class PurchaseRequest(BaseModel):
    packageId: Any = None
    userId: Any = None


class PurchaseResponse(BaseModel):
    success: bool = True
    transactionId: str
    package: PackageOut
    paymentUrl: str
