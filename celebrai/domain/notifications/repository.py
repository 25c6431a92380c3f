"""Tenant lookups used by notifications"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Tenant


class TenantRepository:
    """Repository for tenant reads"""

    @staticmethod
    def get_tenant_profile(db: Session, tenant_id: str) -> Optional[Tenant]:
        """Name and WhatsApp number of a tenant"""
        return (
            db.query(Tenant)
            .filter(Tenant.id == tenant_id)
            .with_entities(Tenant.name, Tenant.whatsapp_number)
            .first()
        )

    @staticmethod
    def get_tenant_owner_id(db: Session, tenant_id: str) -> Optional[str]:
        row = db.query(Tenant.owner_id).filter(Tenant.id == tenant_id).first()
        return row.owner_id if row else None
