"""Contract router - PDF generation, download and signing endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response
from sqlalchemy.orm import Session

from ...database import get_db
from ..notifications.service import notify_contract_signed
from .pdf_service import default_contract_filename, generate_contract_pdf
from .schemas import ContractData, SignContractRequest, SignContractResponse
from .service import ContractService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["Contracts"])


def get_contract_service(db: Session = Depends(get_db)) -> ContractService:
    """Dependency injection for ContractService"""
    return ContractService(db)


def _pdf_response(pdf_bytes: bytes, filename: str, download: bool = True) -> Response:
    disposition = "attachment" if download else "inline"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'{disposition}; filename="{filename}"'},
    )


# ============================================================================
# PDF GENERATION
# ============================================================================


@router.post("/pdf")
async def render_contract_pdf(
    data: ContractData,
    filename: Optional[str] = Query(None, description="Download filename"),
):
    """Render a contract PDF from a full contract record"""
    pdf_bytes = generate_contract_pdf(data)
    return _pdf_response(pdf_bytes, filename or default_contract_filename(data.clientName))


@router.get("/{contract_id}/pdf")
async def get_contract_pdf(
    contract_id: str,
    download: bool = Query(True, description="Send as attachment instead of inline"),
    service: ContractService = Depends(get_contract_service),
):
    """Render the PDF of a stored contract"""
    pdf_bytes, filename = service.render_contract_pdf(contract_id)
    return _pdf_response(pdf_bytes, filename, download=download)


# ============================================================================
# CONTRACT SIGNING
# ============================================================================


@router.post("/{contract_id}/sign", response_model=SignContractResponse)
async def sign_contract(
    contract_id: str,
    signature_request: SignContractRequest,
    background_tasks: BackgroundTasks,
    service: ContractService = Depends(get_contract_service),
):
    """Store the client's signature and notify both parties"""
    contract, event = service.sign_contract(contract_id, signature_request)
    background_tasks.add_task(notify_contract_signed, event)

    return SignContractResponse(
        contractId=contract.id,
        status=contract.status,
        signedAt=event.signedAt,
    )
