"""Contract service - Business logic for contract operations"""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Contract
from ..notifications.schemas import ContractSignedRequest
from .pdf_service import default_contract_filename, generate_contract_pdf
from .repository import ContractRepository
from .schemas import ContractData, QuoteItem, SignContractRequest

logger = logging.getLogger(__name__)


class ContractService:
    """Service layer for contract business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ContractRepository()

    def get_contract(self, contract_id: str) -> Contract:
        """Get a specific contract"""
        contract = self.repo.get_contract_by_id(self.db, contract_id)
        if not contract:
            raise HTTPException(status_code=404, detail="Contract not found")
        return contract

    def build_contract_data(self, contract_id: str) -> ContractData:
        """Assemble the render record from the contract, quote and tenant rows"""
        contract = self.get_contract(contract_id)
        tenant = self.repo.get_tenant_by_id(self.db, contract.tenant_id)
        items = self.repo.get_quote_items(self.db, contract.quote_id)

        return ContractData(
            clientName=contract.client_name,
            clientEmail=contract.client_email,
            clientPhone=contract.client_phone,
            contractType=contract.contract_type,
            notes=contract.notes,
            quoteItems=[
                QuoteItem(
                    description=item.description,
                    quantity=item.quantity,
                    unitPrice=item.unit_price,
                    totalPrice=item.total_price,
                )
                for item in items
            ],
            totalValue=contract.total_value,
            tenantName=tenant.name if tenant else "",
            tenantLogo=tenant.logo_url if tenant else None,
            signatureImage=contract.signature_data,
            signedAt=contract.signed_at,
            createdAt=contract.created_at or datetime.now(timezone.utc),
        )

    def render_contract_pdf(self, contract_id: str) -> tuple[bytes, str]:
        """Return (pdf_bytes, filename) for a stored contract"""
        data = self.build_contract_data(contract_id)
        logger.info(f"📄 Generating contract PDF for contract {contract_id}")
        return generate_contract_pdf(data), default_contract_filename(data.clientName)

    def sign_contract(
        self, contract_id: str, request: SignContractRequest
    ) -> tuple[Contract, ContractSignedRequest]:
        """Record the client's signature and return the contract-signed event"""
        contract = self.get_contract(contract_id)
        if contract.signature_data:
            raise HTTPException(status_code=409, detail="Contract already signed")

        signed_at = datetime.now(timezone.utc)
        contract = self.repo.record_signature(self.db, contract, request.signatureImage, signed_at)
        logger.info(f"✍️ Contract {contract_id} signed by {contract.client_name}")

        event = ContractSignedRequest(
            contractId=contract.id,
            clientName=contract.client_name,
            clientEmail=contract.client_email,
            tenantId=contract.tenant_id,
            signedAt=signed_at,
        )
        return contract, event
