"""Tests for the contract-signed notification dispatcher."""

from datetime import datetime

import httpx
import pytest
from sqlalchemy.exc import SQLAlchemyError

from celebrai.domain.notifications.repository import TenantRepository
from celebrai.domain.notifications.schemas import ContractSignedRequest
from celebrai.domain.notifications.service import (
    FAILED,
    SENT,
    SKIPPED,
    ContractSignedNotifier,
)
from celebrai.email_service import EmailDeliveryError
from celebrai.models import Tenant


class FakeIdentity:
    def __init__(self, emails=None, error=None):
        self.emails = emails or {}
        self.error = error
        self.lookups = []

    async def get_user_email(self, user_id):
        self.lookups.append(user_id)
        if self.error:
            raise self.error
        return self.emails.get(user_id)


class FakeSender:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return {"id": f"email-{len(self.calls)}"}


@pytest.fixture
def tenant(db_session):
    tenant = Tenant(
        id="tenant-1",
        name="Bella Arte Festas",
        whatsapp_number="+55 (11) 99999-9999",
        owner_id="owner-1",
    )
    db_session.add(tenant)
    db_session.commit()
    return tenant


@pytest.fixture
def event():
    return ContractSignedRequest(
        contractId="contract-1",
        clientName="Maria Silva",
        clientEmail="maria@example.com",
        tenantId="tenant-1",
        signedAt=datetime(2026, 3, 14, 16, 45),
    )


def make_notifier(db_session, identity=None, client_sender=None, owner_sender=None):
    return ContractSignedNotifier(
        db_session,
        identity=identity or FakeIdentity({"owner-1": "dona@bellaarte.com"}),
        send_client_email=client_sender or FakeSender(),
        send_owner_email=owner_sender or FakeSender(),
    )


@pytest.mark.asyncio
async def test_notifies_client_and_owner(db_session, tenant, event):
    client_sender, owner_sender = FakeSender(), FakeSender()
    notifier = make_notifier(db_session, client_sender=client_sender, owner_sender=owner_sender)

    result = await notifier.dispatch(event)

    assert result.summary() == {"client": SENT, "owner": SENT}
    assert client_sender.calls == [
        {
            "to": "maria@example.com",
            "client_name": "Maria Silva",
            "tenant_name": "Bella Arte Festas",
            "signed_date": "14/03/2026 16:45",
            "tenant_phone": "+55 (11) 99999-9999",
        }
    ]
    assert owner_sender.calls == [
        {
            "to": "dona@bellaarte.com",
            "client_name": "Maria Silva",
            "tenant_name": "Bella Arte Festas",
            "signed_date": "14/03/2026 16:45",
            "client_email": "maria@example.com",
        }
    ]
    assert result.owner.recipient == "dona@bellaarte.com"


@pytest.mark.asyncio
async def test_tenant_lookup_failure_still_notifies(db_session, tenant, event, monkeypatch):
    def broken_lookup(db, tenant_id):
        raise SQLAlchemyError("connection reset")

    monkeypatch.setattr(TenantRepository, "get_tenant_profile", staticmethod(broken_lookup))
    client_sender, owner_sender = FakeSender(), FakeSender()
    notifier = make_notifier(db_session, client_sender=client_sender, owner_sender=owner_sender)

    result = await notifier.dispatch(event)

    assert result.summary() == {"client": SENT, "owner": SENT}
    assert client_sender.calls[0]["tenant_name"] == "Bella Arte"
    assert client_sender.calls[0]["tenant_phone"] is None
    assert owner_sender.calls[0]["tenant_name"] == "Bella Arte"


@pytest.mark.asyncio
async def test_failed_tenant_lookup_rolls_back_before_owner_lookup(db_session, tenant, event, monkeypatch):
    calls = []

    def broken_lookup(db, tenant_id):
        calls.append("tenant")
        raise SQLAlchemyError("current transaction is aborted")

    original_owner_lookup = TenantRepository.get_tenant_owner_id

    def owner_lookup(db, tenant_id):
        calls.append("owner")
        return original_owner_lookup(db, tenant_id)

    original_rollback = db_session.rollback

    def rollback():
        calls.append("rollback")
        original_rollback()

    monkeypatch.setattr(TenantRepository, "get_tenant_profile", staticmethod(broken_lookup))
    monkeypatch.setattr(TenantRepository, "get_tenant_owner_id", staticmethod(owner_lookup))
    monkeypatch.setattr(db_session, "rollback", rollback)
    owner_sender = FakeSender()
    notifier = make_notifier(db_session, owner_sender=owner_sender)

    result = await notifier.dispatch(event)

    assert calls == ["tenant", "rollback", "owner"]
    assert result.owner.status == SENT
    assert owner_sender.calls[0]["to"] == "dona@bellaarte.com"


@pytest.mark.asyncio
async def test_unknown_tenant_uses_default_name_and_skips_owner(db_session, event):
    client_sender, owner_sender = FakeSender(), FakeSender()
    identity = FakeIdentity()
    notifier = make_notifier(
        db_session, identity=identity, client_sender=client_sender, owner_sender=owner_sender
    )

    result = await notifier.dispatch(event)

    assert result.client.status == SENT
    assert result.owner.status == SKIPPED
    assert client_sender.calls[0]["tenant_name"] == "Bella Arte"
    assert owner_sender.calls == []
    assert identity.lookups == []


@pytest.mark.asyncio
async def test_client_send_failure_does_not_block_owner(db_session, tenant, event):
    client_sender = FakeSender(error=EmailDeliveryError("Failed to send email: 500"))
    owner_sender = FakeSender()
    notifier = make_notifier(db_session, client_sender=client_sender, owner_sender=owner_sender)

    result = await notifier.dispatch(event)

    assert result.client.status == FAILED
    assert "500" in result.client.error
    assert result.owner.status == SENT
    assert len(owner_sender.calls) == 1


@pytest.mark.asyncio
async def test_owner_send_failure_is_reported_separately(db_session, tenant, event):
    owner_sender = FakeSender(error=EmailDeliveryError("rejected"))
    notifier = make_notifier(db_session, owner_sender=owner_sender)

    result = await notifier.dispatch(event)

    assert result.summary() == {"client": SENT, "owner": FAILED}


@pytest.mark.asyncio
async def test_without_client_email_only_owner_is_notified(db_session, tenant, event):
    client_sender, owner_sender = FakeSender(), FakeSender()
    notifier = make_notifier(db_session, client_sender=client_sender, owner_sender=owner_sender)

    result = await notifier.dispatch(event.model_copy(update={"clientEmail": None}))

    assert result.summary() == {"client": SKIPPED, "owner": SENT}
    assert client_sender.calls == []
    assert owner_sender.calls[0]["client_email"] is None


@pytest.mark.asyncio
async def test_identity_failure_skips_owner(db_session, tenant, event):
    identity = FakeIdentity(error=httpx.ConnectError("unreachable"))
    owner_sender = FakeSender()
    notifier = make_notifier(db_session, identity=identity, owner_sender=owner_sender)

    result = await notifier.dispatch(event)

    assert result.summary() == {"client": SENT, "owner": SKIPPED}
    assert identity.lookups == ["owner-1"]
    assert owner_sender.calls == []


@pytest.mark.asyncio
async def test_owner_without_email_is_skipped(db_session, tenant, event):
    notifier = make_notifier(db_session, identity=FakeIdentity({}))

    result = await notifier.dispatch(event)

    assert result.owner.status == SKIPPED
