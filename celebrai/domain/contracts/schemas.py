"""Contract domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class QuoteItem(BaseModel):
    """One billable line of a contract's pricing"""

    description: str
    quantity: Optional[int] = None
    unitPrice: Optional[float] = None
    totalPrice: Optional[float] = None


class ContractData(BaseModel):
    """Everything the contract document is rendered from"""

    clientName: str
    clientEmail: Optional[str] = None
    clientPhone: Optional[str] = None
    contractType: str = "other"  # party, rental, decoration, other
    notes: Optional[str] = None
    quoteItems: Optional[list[QuoteItem]] = None
    totalValue: Optional[float] = None  # Printed as supplied, never recomputed
    tenantName: str
    tenantLogo: Optional[str] = None
    signatureImage: Optional[str] = None  # Base64 image, raw or data URL
    signedAt: Optional[datetime] = None
    createdAt: datetime

    @property
    def is_signed(self) -> bool:
        return bool(self.signatureImage)


class SignContractRequest(BaseModel):
    """Schema for a client signature submission"""

    signatureImage: str  # Base64 signature image


class SignContractResponse(BaseModel):
    """Schema for signature response"""

    contractId: str
    status: str
    signedAt: datetime
