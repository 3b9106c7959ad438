# qmedic/services/alert_service.py
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from qmedic.models.alert import AlertType, NotificationLog
from qmedic.models.item import InventoryItem
from qmedic.services.exceptions import AlertNotFound, TransactionFailure

logger = logging.getLogger(__name__)


def append_alert(
    db: Session,
    *,
    item: InventoryItem,
    alert_type: AlertType,
    details: Optional[str] = None,
) -> NotificationLog:
    """
    Add an alert to the current transaction, snapshotting the item's
    name, location and expiry date. The caller commits.
    """
    alert = NotificationLog(
        item_fk=item.id,
        alert_type=alert_type,
        item_id_at_alert=item.item_id,
        item_name=item.name,
        location=item.location,
        expiry_date_at_alert=item.expiry_date,
        details=details,
        is_read=False,
    )
    db.add(alert)
    db.flush()
    return alert


def has_alert(db: Session, *, item_fk: int, alert_type: AlertType) -> bool:
    return db.query(
        db.query(NotificationLog)
        .filter(
            NotificationLog.item_fk == item_fk,
            NotificationLog.alert_type == alert_type,
        )
        .exists()
    ).scalar()


def list_alerts(db: Session, *, unread_only: bool = False) -> list[NotificationLog]:
    query = db.query(NotificationLog)
    if unread_only:
        query = query.filter(NotificationLog.is_read.is_(False))
    query = query.order_by(NotificationLog.created_at.desc(), NotificationLog.id.desc())
    return query.all()


def mark_alert_read(db: Session, alert_id: int) -> NotificationLog:
    alert = db.get(NotificationLog, alert_id)
    if not alert:
        raise AlertNotFound(alert_id)

    alert.is_read = True
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to mark notification read alert_id=%s", alert_id)
        raise TransactionFailure("Failed to update notification status.")

    db.refresh(alert)
    return alert
