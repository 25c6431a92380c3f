"""
Contract document builder.

Lays the contract out section by section onto A4 pages: header, client box,
contract details, the optional quote table and notes, the standard terms, the
signature block and a footer stamp on every page.
"""

import logging
from datetime import datetime
from types import MappingProxyType
from typing import Optional

from ...shared.formatting import format_currency, format_date_br
from .layout import ContractDocument, LayoutContext
from .schemas import ContractData
from .signature import draw_signature_block

logger = logging.getLogger(__name__)

CONTRACT_TYPE_LABELS = MappingProxyType(
    {
        "party": "Festa",
        "rental": "Locação de Brinquedos",
        "decoration": "Decoração",
        "other": "Serviço",
    }
)

TERMS = (
    "1. O presente contrato estabelece os termos para a prestação dos serviços descritos acima.",
    "2. O cliente declara estar ciente e de acordo com todas as condições estabelecidas.",
    "3. Este documento possui validade jurídica quando assinado digitalmente por ambas as partes.",
    "4. Qualquer alteração neste contrato deverá ser feita por escrito e aprovada pelas partes.",
)

DESCRIPTION_MAX_CHARS = 35

# Cursor positions past which a section starts on a new page
ITEM_ROW_BREAK = 260
NOTES_BREAK = 230
NOTES_LINE_BREAK = 270
TERMS_BREAK = 200
SIGNATURE_BREAK = 230

CLIENT_BOX_FILL = (245, 245, 245)
TABLE_HEADER_FILL = (230, 230, 230)
FOOTER_GRAY = (128, 128, 128)


def contract_type_label(code: str) -> str:
    """Display label for a contract type; unknown codes are shown as given"""
    return CONTRACT_TYPE_LABELS.get(code, code)


def truncate_description(description: str) -> str:
    if len(description) > DESCRIPTION_MAX_CHARS:
        return description[:DESCRIPTION_MAX_CHARS] + "..."
    return description


class ContractDocumentBuilder:
    """Builds the page layout of a contract from a ContractData record"""

    def build(self, data: ContractData, generated_at: Optional[datetime] = None) -> ContractDocument:
        ctx = LayoutContext()

        self._draw_header(ctx, data)
        self._draw_client_info(ctx, data)
        self._draw_details(ctx, data)
        if data.quoteItems:
            self._draw_items(ctx, data)
        if data.notes and data.notes.strip():
            self._draw_notes(ctx, data)
        self._draw_terms(ctx)

        ctx.y += 15
        ctx.break_if_past(SIGNATURE_BREAK)
        draw_signature_block(ctx, data)

        self._draw_footers(ctx, data, generated_at or datetime.now())

        logger.info(f"📄 Laid out contract for {data.clientName} on {len(ctx.pages)} page(s)")
        return ctx.finish(title=f"Contrato - {data.clientName}")

    def _draw_header(self, ctx: LayoutContext, data: ContractData) -> None:
        ctx.section = "header"
        ctx.add_text(data.tenantName, font_size=22, bold=True)
        ctx.y += 5

        ctx.section = "title"
        ctx.rule()
        ctx.y += 10
        ctx.add_text("CONTRATO DE SERVIÇOS", font_size=16, bold=True, align="center")
        ctx.y += 15

    def _draw_client_info(self, ctx: LayoutContext, data: ContractData) -> None:
        ctx.section = "client"
        x = ctx.margin + 5
        ctx.rect(ctx.margin, ctx.y - 5, ctx.content_width, 35, CLIENT_BOX_FILL)

        ctx.add_text("DADOS DO CLIENTE", x, font_size=12, bold=True)
        ctx.y += 3
        ctx.add_text(f"Nome: {data.clientName}", x, font_size=11)
        if data.clientPhone:
            ctx.add_text(f"Telefone: {data.clientPhone}", x, font_size=11)
        if data.clientEmail:
            ctx.add_text(f"Email: {data.clientEmail}", x, font_size=11)
        ctx.y += 10

    def _draw_details(self, ctx: LayoutContext, data: ContractData) -> None:
        ctx.section = "details"
        ctx.add_text(f"Tipo de Serviço: {contract_type_label(data.contractType)}", font_size=11)
        ctx.add_text(f"Data de Emissão: {format_date_br(data.createdAt)}", font_size=11)
        ctx.y += 10

    def _draw_items(self, ctx: LayoutContext, data: ContractData) -> None:
        ctx.section = "items"
        qty_x = ctx.page_width - 80
        unit_x = ctx.page_width - 55
        total_x = ctx.right - 5

        ctx.rule()
        ctx.y += 8
        ctx.add_text("ITENS DO ORÇAMENTO", font_size=12, bold=True)
        ctx.y += 8

        ctx.rect(ctx.margin, ctx.y - 5, ctx.content_width, 10, TABLE_HEADER_FILL)
        ctx.text_at("Descrição", ctx.margin + 5, ctx.y, font_size=10, bold=True)
        ctx.text_at("Qtd", qty_x, ctx.y, font_size=10, bold=True, align="center")
        ctx.text_at("Unit.", unit_x, ctx.y, font_size=10, bold=True, align="center")
        ctx.text_at("Total", total_x, ctx.y, font_size=10, bold=True, align="right")
        ctx.y += 8

        for item in data.quoteItems:
            ctx.break_if_past(ITEM_ROW_BREAK)
            ctx.text_at(truncate_description(item.description), ctx.margin + 5, ctx.y, font_size=10)
            ctx.text_at(str(item.quantity or 1), qty_x, ctx.y, font_size=10, align="center")
            ctx.text_at(format_currency(item.unitPrice), unit_x, ctx.y, font_size=10, align="center")
            ctx.text_at(format_currency(item.totalPrice), total_x, ctx.y, font_size=10, align="right")
            ctx.y += 7

        ctx.y += 5
        ctx.rule(ctx.y - 3)

        ctx.section = "total"
        ctx.y += 5
        ctx.add_text(
            f"VALOR TOTAL: {format_currency(data.totalValue)}",
            font_size=12,
            bold=True,
            align="right",
        )
        ctx.y += 10

    def _draw_notes(self, ctx: LayoutContext, data: ContractData) -> None:
        ctx.break_if_past(NOTES_BREAK)
        ctx.section = "notes"

        ctx.rule()
        ctx.y += 8
        ctx.add_text("OBSERVAÇÕES", font_size=12, bold=True)
        ctx.y += 5

        for line in ctx.wrap(data.notes, font_size=10):
            ctx.break_if_past(NOTES_LINE_BREAK)
            ctx.text_at(line, ctx.margin, ctx.y, font_size=10)
            ctx.y += 5
        ctx.y += 10

    def _draw_terms(self, ctx: LayoutContext) -> None:
        ctx.break_if_past(TERMS_BREAK)
        ctx.section = "terms"

        ctx.rule()
        ctx.y += 8
        ctx.add_text("TERMOS E CONDIÇÕES", font_size=12, bold=True)
        ctx.y += 5

        for term in TERMS:
            for line in ctx.wrap(term, font_size=9):
                ctx.text_at(line, ctx.margin, ctx.y, font_size=9)
                ctx.y += 4.5
            ctx.y += 2

    def _draw_footers(self, ctx: LayoutContext, data: ContractData, generated_at: datetime) -> None:
        stamp = f"{data.tenantName} - Contrato gerado em {format_date_br(generated_at)}"
        ctx.section = "footer"
        ctx.stamp_every_page(
            stamp,
            ctx.page_width / 2,
            ctx.page_height - 10,
            font_size=8,
            align="center",
            color=FOOTER_GRAY,
        )
