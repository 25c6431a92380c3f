"""Contract PDF export - draws laid-out contracts with reportlab and delivers the file"""

import io
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Optional, Union

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ...shared.formatting import slugify_client_name
from .layout import ContractDocument, ImageOp, LineOp, RectOp, TextOp
from .pdf_builder import ContractDocumentBuilder
from .schemas import ContractData

logger = logging.getLogger(__name__)

LINE_WIDTH = 0.57  # points


def _rgb(color: tuple) -> tuple:
    return tuple(channel / 255 for channel in color)


def _draw_op(pdf: canvas.Canvas, op, page_height: float) -> None:
    """Replay one draw operation, flipping the y axis to PDF space"""
    if isinstance(op, TextOp):
        pdf.setFont("Helvetica-Bold" if op.bold else "Helvetica", op.font_size)
        pdf.setFillColorRGB(*_rgb(op.color))
        x, y = op.x * mm, (page_height - op.y) * mm
        if op.align == "center":
            pdf.drawCentredString(x, y, op.text)
        elif op.align == "right":
            pdf.drawRightString(x, y, op.text)
        else:
            pdf.drawString(x, y, op.text)

    elif isinstance(op, LineOp):
        pdf.setStrokeColorRGB(*_rgb(op.color))
        pdf.setLineWidth(LINE_WIDTH)
        pdf.line(op.x1 * mm, (page_height - op.y1) * mm, op.x2 * mm, (page_height - op.y2) * mm)

    elif isinstance(op, RectOp):
        pdf.setFillColorRGB(*_rgb(op.fill_color))
        pdf.rect(
            op.x * mm,
            (page_height - op.y - op.height) * mm,
            op.width * mm,
            op.height * mm,
            stroke=0,
            fill=1,
        )

    elif isinstance(op, ImageOp):
        try:
            pdf.drawImage(
                ImageReader(io.BytesIO(op.data)),
                op.x * mm,
                (page_height - op.y - op.height) * mm,
                width=op.width * mm,
                height=op.height * mm,
                mask="auto",
            )
        except Exception as e:
            logger.error(f"❌ Error drawing image in section '{op.section}': {e}")


def export_contract_pdf(document: ContractDocument) -> bytes:
    """
    Serialize a laid-out contract to PDF bytes.

    The canvas runs in invariant mode, so the same document always produces
    the same bytes.
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(
        buffer,
        pagesize=(document.page_width * mm, document.page_height * mm),
        invariant=1,
    )
    pdf.setTitle(document.title)

    for page in document.pages:
        for op in page.ops:
            _draw_op(pdf, op, document.page_height)
        pdf.showPage()

    pdf.save()
    pdf_bytes = buffer.getvalue()
    buffer.close()

    logger.info(f"✅ Generated contract PDF ({len(pdf_bytes)} bytes, {len(document.pages)} page(s))")
    return pdf_bytes


def generate_contract_pdf(data: ContractData, generated_at: Optional[datetime] = None) -> bytes:
    """Lay out and export a contract"""
    document = ContractDocumentBuilder().build(data, generated_at=generated_at)
    return export_contract_pdf(document)


def default_contract_filename(client_name: str) -> str:
    return f"contrato-{slugify_client_name(client_name)}.pdf"


def download_contract_pdf(
    data: ContractData,
    filename: Optional[str] = None,
    output_dir: Optional[Union[str, Path]] = None,
    generated_at: Optional[datetime] = None,
) -> Path:
    """
    Generate the contract and deliver it as a file in ``output_dir``.

    The PDF goes through a transient temporary file that is moved into place;
    the temporary file is removed on every path, including failures.
    """
    target_dir = Path(output_dir) if output_dir else Path.cwd()
    target = target_dir / (filename or default_contract_filename(data.clientName))
    pdf_bytes = generate_contract_pdf(data, generated_at=generated_at)

    handle = tempfile.NamedTemporaryFile(
        dir=target_dir, prefix=".contrato-", suffix=".part", delete=False
    )
    try:
        with handle:
            handle.write(pdf_bytes)
        os.replace(handle.name, target)
    finally:
        if os.path.exists(handle.name):
            os.unlink(handle.name)

    logger.info(f"📄 Contract PDF saved to {target}")
    return target


def write_contract_pdf(
    data: ContractData, stream: BinaryIO, generated_at: Optional[datetime] = None
) -> int:
    """Write the contract PDF to a caller-owned binary stream"""
    pdf_bytes = generate_contract_pdf(data, generated_at=generated_at)
    written = stream.write(pdf_bytes)
    stream.flush()
    return written
