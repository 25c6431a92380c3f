"""Contract-signed notifications - client confirmation and owner alert"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import DEFAULT_TENANT_NAME
from ...database import SessionLocal
from ...email_service import (
    EmailDeliveryError,
    TemplateRenderError,
    send_contract_signed_client_confirmation,
    send_contract_signed_owner_notification,
)
from ...shared.formatting import format_datetime_br
from .identity import AuthAdminClient
from .repository import TenantRepository
from .schemas import ContractSignedRequest

logger = logging.getLogger(__name__)

SENT = "sent"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass
class EmailOutcome:
    """Result of one notification email"""

    status: str
    recipient: Optional[str] = None
    response: Optional[Any] = None
    error: Optional[str] = None


@dataclass
class ContractSignedDispatch:
    """Independent outcomes of the client and owner emails"""

    client: EmailOutcome
    owner: EmailOutcome

    def summary(self) -> dict:
        return {"client": self.client.status, "owner": self.owner.status}


class ContractSignedNotifier:
    """
    Sends the two contract-signed emails.

    The client confirmation and the owner notification are separate side
    effects: a failure on one is recorded in its outcome and never stops the
    other. Lookups degrade to defaults instead of failing.
    """

    def __init__(
        self,
        db: Session,
        identity: Optional[AuthAdminClient] = None,
        send_client_email=send_contract_signed_client_confirmation,
        send_owner_email=send_contract_signed_owner_notification,
    ):
        self.db = db
        self.repo = TenantRepository()
        self.identity = identity or AuthAdminClient()
        self.send_client_email = send_client_email
        self.send_owner_email = send_owner_email

    async def dispatch(self, event: ContractSignedRequest) -> ContractSignedDispatch:
        logger.info(
            f"📨 Processing contract signed notification: contract={event.contractId} "
            f"client={event.clientName} tenant={event.tenantId}"
        )

        tenant = self._lookup_tenant(event.tenantId)
        tenant_name = (tenant.name if tenant else None) or DEFAULT_TENANT_NAME
        tenant_phone = tenant.whatsapp_number if tenant else None
        signed_date = format_datetime_br(event.signedAt)

        if event.clientEmail:
            client_outcome = await self._deliver(
                "client confirmation",
                event.clientEmail,
                self.send_client_email,
                client_name=event.clientName,
                tenant_name=tenant_name,
                signed_date=signed_date,
                tenant_phone=tenant_phone,
            )
        else:
            client_outcome = EmailOutcome(SKIPPED, error="no client email")

        owner_email = await self._lookup_owner_email(event.tenantId)
        if owner_email:
            owner_outcome = await self._deliver(
                "owner notification",
                owner_email,
                self.send_owner_email,
                client_name=event.clientName,
                tenant_name=tenant_name,
                signed_date=signed_date,
                client_email=event.clientEmail,
            )
        else:
            owner_outcome = EmailOutcome(SKIPPED, error="owner email not found")

        return ContractSignedDispatch(client=client_outcome, owner=owner_outcome)

    def _lookup_tenant(self, tenant_id: str):
        try:
            tenant = self.repo.get_tenant_profile(self.db, tenant_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching tenant {tenant_id}: {e}")
            self.db.rollback()
            return None
        if not tenant:
            logger.warning(f"⚠️ Tenant {tenant_id} not found - using default name")
        return tenant

    async def _lookup_owner_email(self, tenant_id: str) -> Optional[str]:
        try:
            owner_id = self.repo.get_tenant_owner_id(self.db, tenant_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching owner of tenant {tenant_id}: {e}")
            self.db.rollback()
            return None
        if not owner_id:
            return None

        try:
            return await self.identity.get_user_email(owner_id)
        except httpx.HTTPError as e:
            logger.error(f"❌ Error fetching owner {owner_id} email: {e}")
            return None

    async def _deliver(self, label: str, recipient: str, send, **kwargs) -> EmailOutcome:
        logger.info(f"📧 Sending {label} to: {recipient}")
        try:
            response = await send(to=recipient, **kwargs)
        except (EmailDeliveryError, TemplateRenderError) as e:
            logger.error(f"❌ Failed to send {label} to {recipient}: {e}")
            return EmailOutcome(FAILED, recipient, error=str(e))

        logger.info(f"✅ {label.capitalize()} sent: {response}")
        return EmailOutcome(SENT, recipient, response=response)


async def notify_contract_signed(event: ContractSignedRequest) -> None:
    """Background task run after a signature is stored"""
    db = SessionLocal()
    try:
        result = await ContractSignedNotifier(db).dispatch(event)
        logger.info(f"📨 Contract {event.contractId} notifications: {result.summary()}")
    except Exception as e:
        logger.error(f"❌ Contract signed notification failed for {event.contractId}: {e}")
    finally:
        db.close()
