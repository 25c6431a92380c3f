"""Tests for contract-signed email templates and delivery."""

from importlib.metadata import packages_distributions

import pytest
import resend

from celebrai import email_service
from celebrai.email_service import (
    EmailDeliveryError,
    compile_mjml_to_html,
    send_contract_signed_client_confirmation,
    send_contract_signed_owner_notification,
    send_email,
)
from celebrai.email_templates import contract_signed_client_template, contract_signed_owner_template
from celebrai.shared.formatting import whatsapp_link


@pytest.fixture
def resend_outbox(monkeypatch):
    """Capture messages handed to Resend."""
    sent = []

    def fake_send(params):
        sent.append(params)
        return {"id": f"email-{len(sent)}"}

    monkeypatch.setattr(email_service, "RESEND_API_KEY", "re_test_key")
    monkeypatch.setattr(resend.Emails, "send", fake_send)
    return sent


def test_mjml_compiler_comes_from_the_mjml_distribution():
    assert "mjml" in packages_distributions()["mjml"]
    html = compile_mjml_to_html(
        "<mjml><mj-body><mj-section><mj-column><mj-text>Oi</mj-text></mj-column></mj-section></mj-body></mjml>"
    )
    assert "Oi" in html
    assert "<mj-text>" not in html


def test_whatsapp_link_keeps_only_digits():
    assert whatsapp_link("+55 (11) 99999-9999") == "https://wa.me/5511999999999"
    assert whatsapp_link("") is None
    assert whatsapp_link(None) is None


def test_client_template_renders_details_and_whatsapp_button():
    html = compile_mjml_to_html(
        contract_signed_client_template(
            client_name="Maria Silva",
            tenant_name="Bella Arte Festas",
            signed_date="14/03/2026 16:45",
            whatsapp_url="https://wa.me/5511999999999",
        )
    )

    assert "Maria Silva" in html
    assert "14/03/2026 16:45" in html
    assert "Bella Arte Festas" in html
    assert "https://wa.me/5511999999999" in html


def test_client_template_without_phone_has_no_whatsapp_button():
    mjml = contract_signed_client_template(
        client_name="Maria Silva",
        tenant_name="Bella Arte",
        signed_date="14/03/2026 16:45",
    )

    assert "wa.me" not in mjml
    assert "WhatsApp" not in mjml


def test_owner_template_includes_optional_client_email():
    with_email = contract_signed_owner_template(
        client_name="Maria Silva",
        tenant_name="Bella Arte",
        signed_date="14/03/2026 16:45",
        client_email="maria@example.com",
    )
    without_email = contract_signed_owner_template(
        client_name="Maria Silva",
        tenant_name="Bella Arte",
        signed_date="14/03/2026 16:45",
    )

    assert "maria@example.com" in with_email
    assert "📧" not in without_email
    assert "Sistema de Contratos - Bella Arte" in without_email


def test_templates_escape_client_input():
    mjml = contract_signed_owner_template(
        client_name="<script>alert(1)</script>",
        tenant_name="Bella Arte",
        signed_date="14/03/2026 16:45",
    )

    assert "<script>" not in mjml
    assert "&lt;script&gt;" in mjml


@pytest.mark.asyncio
async def test_send_email_requires_api_key(monkeypatch):
    calls = []
    monkeypatch.setattr(email_service, "RESEND_API_KEY", None)
    monkeypatch.setattr(resend.Emails, "send", lambda params: calls.append(params))

    with pytest.raises(EmailDeliveryError):
        await send_email("maria@example.com", "Olá", "<mjml><mj-body></mj-body></mjml>", "Bella Arte")

    assert calls == []


@pytest.mark.asyncio
async def test_send_email_wraps_provider_errors(monkeypatch):
    def rejecting_send(params):
        raise RuntimeError("422 invalid from address")

    monkeypatch.setattr(email_service, "RESEND_API_KEY", "re_test_key")
    monkeypatch.setattr(resend.Emails, "send", rejecting_send)

    with pytest.raises(EmailDeliveryError, match="invalid from address"):
        await send_email("maria@example.com", "Olá", "<mjml><mj-body></mj-body></mjml>", "Bella Arte")


@pytest.mark.asyncio
async def test_client_confirmation_message(resend_outbox):
    response = await send_contract_signed_client_confirmation(
        to="maria@example.com",
        client_name="Maria Silva",
        tenant_name="Bella Arte Festas",
        signed_date="14/03/2026 16:45",
        tenant_phone="(11) 99999-9999",
    )

    assert response == {"id": "email-1"}
    (message,) = resend_outbox
    assert message["to"] == ["maria@example.com"]
    assert message["from"] == "Bella Arte Festas <onboarding@resend.dev>"
    assert message["subject"] == "✅ Contrato Assinado - Bella Arte Festas"
    assert "https://wa.me/11999999999" in message["html"]


@pytest.mark.asyncio
async def test_owner_notification_message(resend_outbox):
    await send_contract_signed_owner_notification(
        to="dona@bellaarte.com",
        client_name="Maria Silva",
        tenant_name="Bella Arte Festas",
        signed_date="14/03/2026 16:45",
        client_email="maria@example.com",
    )

    (message,) = resend_outbox
    assert message["to"] == ["dona@bellaarte.com"]
    assert message["from"] == "Sistema de Contratos <onboarding@resend.dev>"
    assert message["subject"] == "🎉 Novo Contrato Assinado - Maria Silva"
    assert "maria@example.com" in message["html"]
