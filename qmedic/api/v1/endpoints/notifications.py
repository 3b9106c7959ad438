# qmedic/api/v1/endpoints/notifications.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from qmedic.core.database import get_db, get_read_db
from qmedic.schemas.alert import AlertResponse
from qmedic.services.alert_service import list_alerts, mark_alert_read

router = APIRouter()


@router.get("", response_model=list[AlertResponse])
def get_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: Session = Depends(get_read_db),
) -> list[AlertResponse]:
    """
    All alerts, newest first.
    """
    return [AlertResponse.model_validate(a) for a in list_alerts(db, unread_only=unread_only)]


@router.post("/read/{alert_id}", response_model=AlertResponse)
def read_notification(alert_id: int, db: Session = Depends(get_db)) -> AlertResponse:
    """
    Mark a notification as read.
    """
    return AlertResponse.model_validate(mark_alert_read(db, alert_id))
