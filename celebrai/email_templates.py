"""
MJML Email Templates
Contract-signed notifications, compiled to HTML by email_service
"""

from html import escape
from typing import Optional

THEME = {
    "primary": "#8b5cf6",
    "success": "#10b981",
    "success_dark": "#065f46",
    "success_light": "#ecfdf5",
    "whatsapp": "#25d366",
    "background": "#f9fafb",
    "card_bg": "#ffffff",
    "text_primary": "#111827",
    "text_secondary": "#333333",
    "text_muted": "#6b7280",
    "border": "#e5e7eb",
}


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    footer_text: str,
    header_color: str = THEME["primary"],
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
    cta_color: str = THEME["whatsapp"],
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section background-color="{THEME['background']}" padding="0 30px 10px 30px">
          <mj-column>
            <mj-button
              href="{escape(cta_url)}"
              background-color="{cta_color}"
              color="#ffffff"
              font-weight="bold"
              border-radius="8px"
              padding="12px 24px"
              font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="#ffffff" width="600px">
        <mj-section background-color="{header_color}" padding="30px" border-radius="12px 12px 0 0">
          <mj-column>
            <mj-text align="center" color="#ffffff" font-size="24px" font-weight="bold" padding="0">
              {title}
            </mj-text>
          </mj-column>
        </mj-section>

        <mj-section background-color="{THEME['background']}" padding="30px 30px 10px 30px">
          <mj-column>
            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section background-color="{THEME['background']}" padding="10px 30px 30px 30px">
          <mj-column>
            <mj-divider border-color="{THEME['border']}" border-width="1px" padding="0 0 20px 0" />
            <mj-text align="center" font-size="14px" color="{THEME['text_muted']}" padding="0">
              {footer_text}
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def contract_signed_client_template(
    client_name: str,
    tenant_name: str,
    signed_date: str,
    whatsapp_url: Optional[str] = None,
) -> str:
    """Signature confirmation sent to the client"""
    client_name = escape(client_name)
    tenant_name = escape(tenant_name)

    content = f"""
    <mj-text>
      Olá <strong>{client_name}</strong>,
    </mj-text>

    <mj-text>
      Seu contrato foi assinado digitalmente com sucesso!
    </mj-text>

    <mj-text container-background-color="{THEME['card_bg']}" padding="20px">
      <strong>📅 Data da Assinatura:</strong> {signed_date}<br/>
      <strong>✍️ Assinado por:</strong> {client_name}
    </mj-text>

    <mj-text>
      Este e-mail serve como confirmação da sua assinatura digital. Guarde-o para seus registros.
    </mj-text>

    <mj-text container-background-color="{THEME['success_light']}" color="{THEME['success_dark']}" font-size="14px" padding="15px">
      🔒 <strong>Assinatura Digital Registrada</strong><br/>
      Sua assinatura foi registrada com data e hora para garantir a autenticidade do documento.
    </mj-text>
    """

    return get_base_template(
        title="✅ Contrato Assinado com Sucesso!",
        preview_text=f"Contrato Assinado - {tenant_name}",
        content_sections=content,
        footer_text=f"{tenant_name}<br/>Este é um e-mail automático, por favor não responda.",
        header_color=THEME["success"],
        cta_url=whatsapp_url,
        cta_label="💬 Entrar em contato via WhatsApp" if whatsapp_url else None,
    )


def contract_signed_owner_template(
    client_name: str,
    tenant_name: str,
    signed_date: str,
    client_email: Optional[str] = None,
) -> str:
    """New-signature notification sent to the tenant owner"""
    client_name = escape(client_name)
    tenant_name = escape(tenant_name)

    email_line = ""
    if client_email:
        email_line = f"<strong>📧 Email:</strong> {escape(client_email)}<br/>"

    content = f"""
    <mj-text>
      Boas notícias!
    </mj-text>

    <mj-text>
      O cliente <strong>{client_name}</strong> acabou de assinar o contrato digitalmente.
    </mj-text>

    <mj-text container-background-color="{THEME['card_bg']}" padding="20px">
      <strong>👤 Cliente:</strong> {client_name}<br/>
      {email_line}
      <strong>📅 Data:</strong> {signed_date}
    </mj-text>

    <mj-text>
      Acesse o painel administrativo para visualizar a assinatura e baixar o contrato em PDF.
    </mj-text>
    """

    return get_base_template(
        title="🎉 Contrato Assinado!",
        preview_text=f"Novo Contrato Assinado - {client_name}",
        content_sections=content,
        footer_text=f"Sistema de Contratos - {tenant_name}",
        header_color=THEME["primary"],
    )
