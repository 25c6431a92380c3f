"""Dashboard router - admin statistics"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Appointment, Tenant
from .schemas import DashboardStats
from .stats import compute_dashboard_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/{tenant_id}/stats", response_model=DashboardStats)
async def get_dashboard_stats(tenant_id: str, db: Session = Depends(get_db)):
    """Appointment statistics for a tenant's admin dashboard"""
    if not db.query(Tenant.id).filter(Tenant.id == tenant_id).first():
        raise HTTPException(status_code=404, detail="Tenant not found")

    appointments = (
        db.query(Appointment)
        .filter(Appointment.tenant_id == tenant_id)
        .order_by(Appointment.event_date.asc())
        .all()
    )
    return compute_dashboard_stats(appointments)
