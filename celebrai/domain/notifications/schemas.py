"""Notification schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ContractSignedRequest(BaseModel):
    """Payload of the contract-signed event"""

    contractId: str
    clientName: str
    clientEmail: Optional[str] = None
    tenantId: str
    signedAt: datetime
