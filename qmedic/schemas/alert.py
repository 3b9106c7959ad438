# qmedic/schemas/alert.py
from datetime import date, datetime

from qmedic.models.alert import AlertType
from qmedic.schemas.base import CamelModel


class AlertResponse(CamelModel):
    id: int
    alert_type: AlertType
    item_id_at_alert: str
    item_name: str
    location: str | None
    expiry_date_at_alert: date | None
    details: str | None
    is_read: bool
    created_at: datetime


class ExpiryScanResponse(CamelModel):
    items_checked: int
    alerts_created: int
