"""Contract repository - Database operations for contracts"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Contract, Tenant
from ...models import QuoteItem as QuoteItemModel


class ContractRepository:
    """Repository for contract database operations"""

    @staticmethod
    def get_contract_by_id(db: Session, contract_id: str) -> Optional[Contract]:
        return db.query(Contract).filter(Contract.id == contract_id).first()

    @staticmethod
    def get_tenant_by_id(db: Session, tenant_id: str) -> Optional[Tenant]:
        return db.query(Tenant).filter(Tenant.id == tenant_id).first()

    @staticmethod
    def get_quote_items(db: Session, quote_id: Optional[str]) -> list[QuoteItemModel]:
        """Quote lines in display order"""
        if not quote_id:
            return []
        return (
            db.query(QuoteItemModel)
            .filter(QuoteItemModel.quote_id == quote_id)
            .order_by(QuoteItemModel.position)
            .all()
        )

    @staticmethod
    def record_signature(
        db: Session, contract: Contract, signature_data: str, signed_at: datetime
    ) -> Contract:
        contract.signature_data = signature_data
        contract.signed_at = signed_at
        contract.status = "signed"
        db.commit()
        db.refresh(contract)
        return contract
