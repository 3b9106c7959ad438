# qmedic/api/v1/endpoints/tasks.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from qmedic.core.database import get_db
from qmedic.schemas.alert import ExpiryScanResponse
from qmedic.services.expiry_service import run_expiry_scan

router = APIRouter()


@router.post("/expiry-scan", response_model=ExpiryScanResponse)
def trigger_expiry_scan(db: Session = Depends(get_db)) -> ExpiryScanResponse:
    """
    Manual trigger for the daily expiry check.
    Can be called by a cron job or scheduler.
    """
    result = run_expiry_scan(db)
    return ExpiryScanResponse(
        items_checked=result.items_checked,
        alerts_created=result.alerts_created,
    )
