"""
Email Service using Resend
Compiles MJML templates to responsive HTML and sends them as transactional email
"""

import logging
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from .config import (
    EMAIL_FROM_ADDRESS,
    OWNER_NOTIFICATION_SENDER,
    RESEND_API_KEY,
)
from .email_templates import contract_signed_client_template, contract_signed_owner_template
from .shared.formatting import whatsapp_link

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


class EmailDeliveryError(Exception):
    """The email provider did not accept the message"""


class TemplateRenderError(Exception):
    """An MJML template could not be compiled"""


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        # mjml_to_html returns a dict with 'html' and 'errors' keys
        if isinstance(result, dict):
            if result.get("errors"):
                logger.warning(f"MJML compilation warnings: {result['errors']}")
            return result.get("html", "")
        return str(result)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise TemplateRenderError(f"Failed to compile MJML template: {str(e)}") from e


def format_sender(display_name: str) -> str:
    return f"{display_name} <{EMAIL_FROM_ADDRESS}>"


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_name: str,
) -> dict:
    """
    Send an email through Resend

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_name: Display name of the sender

    Returns:
        Resend response dict

    Raises:
        EmailDeliveryError: when Resend is not configured or rejects the message
    """
    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    if not RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise EmailDeliveryError("Email service not configured")

    try:
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        response = resend.Emails.send(
            {
                "from": format_sender(from_name),
                "to": recipients,
                "subject": subject,
                "html": html_content,
            }
        )
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise EmailDeliveryError(f"Failed to send email: {str(e)}") from e


async def send_contract_signed_client_confirmation(
    to: str,
    client_name: str,
    tenant_name: str,
    signed_date: str,
    tenant_phone: Optional[str] = None,
) -> dict:
    """Confirm to the client that their signature was recorded"""
    mjml_content = contract_signed_client_template(
        client_name=client_name,
        tenant_name=tenant_name,
        signed_date=signed_date,
        whatsapp_url=whatsapp_link(tenant_phone),
    )

    return await send_email(
        to=to,
        subject=f"✅ Contrato Assinado - {tenant_name}",
        mjml_content=mjml_content,
        from_name=tenant_name,
    )


async def send_contract_signed_owner_notification(
    to: str,
    client_name: str,
    tenant_name: str,
    signed_date: str,
    client_email: Optional[str] = None,
) -> dict:
    """Tell the tenant owner that a client signed"""
    mjml_content = contract_signed_owner_template(
        client_name=client_name,
        tenant_name=tenant_name,
        signed_date=signed_date,
        client_email=client_email,
    )

    return await send_email(
        to=to,
        subject=f"🎉 Novo Contrato Assinado - {client_name}",
        mjml_content=mjml_content,
        from_name=OWNER_NOTIFICATION_SENDER,
    )
