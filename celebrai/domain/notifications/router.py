"""Notification router - contract-signed email endpoint"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ContractSignedRequest
from .service import ContractSignedNotifier

logger = logging.getLogger(__name__)

FUNCTIONS_PREFIX = "/functions"

router = APIRouter(prefix=FUNCTIONS_PREFIX, tags=["Notifications"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def get_contract_signed_notifier(db: Session = Depends(get_db)) -> ContractSignedNotifier:
    """Dependency injection for ContractSignedNotifier"""
    return ContractSignedNotifier(db)


@router.options("/send-contract-signed-email")
async def contract_signed_email_preflight():
    """CORS preflight"""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/send-contract-signed-email")
async def send_contract_signed_email(
    request: Request,
    notifier: ContractSignedNotifier = Depends(get_contract_signed_notifier),
):
    """Email the client and the tenant owner after a contract is signed"""
    try:
        event = ContractSignedRequest.model_validate_json(await request.body())
        result = await notifier.dispatch(event)
    except Exception as e:
        logger.error(f"❌ Error in send-contract-signed-email: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)}, headers=CORS_HEADERS)

    return JSONResponse(
        content={
            "success": True,
            "message": "Emails sent successfully",
            "notifications": result.summary(),
        },
        headers=CORS_HEADERS,
    )
