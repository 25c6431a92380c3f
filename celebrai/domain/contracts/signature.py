"""Signature block for contract documents"""

import base64
import io
import logging
from typing import Optional

from reportlab.lib.utils import ImageReader

from ...shared.formatting import format_datetime_br
from .layout import LayoutContext
from .schemas import ContractData

logger = logging.getLogger(__name__)

SIGNATURE_WIDTH = 60
SIGNATURE_HEIGHT = 25
SIGNATURE_LINE_WIDTH = 70
MUTED_GRAY = (100, 100, 100)


def decode_signature_image(value: str) -> Optional[bytes]:
    """
    Decode a captured signature (raw base64 or a ``data:image/...`` URL).

    Returns the image bytes, or None when the payload is not a readable image.
    """
    try:
        encoded = value.split(",", 1)[1] if value.startswith("data:") else value
        # MIME-style payloads may be line-wrapped
        raw = base64.b64decode("".join(encoded.split()), validate=True)
        ImageReader(io.BytesIO(raw)).getSize()
    except Exception as e:
        logger.error(f"❌ Error adding signature image: {e}")
        return None
    return raw


def draw_signature_block(ctx: LayoutContext, data: ContractData) -> None:
    """Embedded signature when the contract is signed, blank lines otherwise"""
    ctx.section = "signature"

    if data.is_signed:
        ctx.rule()
        ctx.y += 10
        ctx.add_text("ASSINATURA DIGITAL", font_size=12, bold=True)
        ctx.y += 10

        image = decode_signature_image(data.signatureImage)
        if image is not None:
            ctx.image(image, ctx.margin, ctx.y, SIGNATURE_WIDTH, SIGNATURE_HEIGHT)

        ctx.y += 30
        ctx.line(ctx.margin, ctx.y, ctx.margin + SIGNATURE_LINE_WIDTH, ctx.y)
        ctx.y += 5
        ctx.text_at(data.clientName, ctx.margin, ctx.y, font_size=10)

        if data.signedAt:
            ctx.y += 5
            ctx.text_at(
                f"Assinado digitalmente em: {format_datetime_br(data.signedAt)}",
                ctx.margin,
                ctx.y,
                font_size=9,
                color=MUTED_GRAY,
            )
    else:
        # Lines for signing by hand
        ctx.y += 20
        left_end = ctx.margin + SIGNATURE_LINE_WIDTH
        right_start = ctx.right - SIGNATURE_LINE_WIDTH

        ctx.line(ctx.margin, ctx.y, left_end, ctx.y)
        ctx.text_at("Contratante", ctx.margin, ctx.y + 5, font_size=10)

        ctx.line(right_start, ctx.y, ctx.right, ctx.y)
        ctx.text_at("Contratado", right_start, ctx.y + 5, font_size=10)
