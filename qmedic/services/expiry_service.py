# qmedic/services/expiry_service.py
"""
Daily expiry check.

- 15-Day Expiry Warning: raised when exactly 15 days remain.
- 7-Day Expiry Warning:  raised when 1..7 days remain.

Each warning kind is raised at most once per item, unlike Low Stock alerts
which repeat on every qualifying action.
"""

import logging
from datetime import date
from typing import NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from qmedic.models.alert import AlertType
from qmedic.models.item import InventoryItem
from qmedic.services.alert_service import append_alert, has_alert
from qmedic.services.exceptions import TransactionFailure
from qmedic.utils.datetime_utils import days_until, utc_today

logger = logging.getLogger(__name__)

FIFTEEN_DAY_WINDOW = 15
SEVEN_DAY_WINDOW = 7


class ExpiryScanResult(NamedTuple):
    items_checked: int
    alerts_created: int


def expiry_alerts_due(days_left: int) -> list[AlertType]:
    """Warning kinds that apply to an item with `days_left` days to expiry."""
    due: list[AlertType] = []
    if days_left == FIFTEEN_DAY_WINDOW:
        due.append(AlertType.EXPIRY_15_DAY)
    if 0 < days_left <= SEVEN_DAY_WINDOW:
        due.append(AlertType.EXPIRY_7_DAY)
    return due


def run_expiry_scan(db: Session, today: Optional[date] = None) -> ExpiryScanResult:
    """
    Compare every dated item against `today` and log the expiry warnings
    that are due and not already logged for that item.
    """
    today = today or utc_today()
    alerts_created = 0

    try:
        items = (
            db.query(InventoryItem)
            .filter(InventoryItem.expiry_date.is_not(None))
            .all()
        )

        for item in items:
            days_left = days_until(item.expiry_date, today)

            for alert_type in expiry_alerts_due(days_left):
                if has_alert(db, item_fk=item.id, alert_type=alert_type):
                    continue

                logger.info(
                    "Item %s is expiring in %s days; logging %s",
                    item.item_id,
                    days_left,
                    alert_type.value,
                )
                append_alert(
                    db,
                    item=item,
                    alert_type=alert_type,
                    details=f"Expires in {days_left} days",
                )
                alerts_created += 1

        db.commit()

    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Expiry scan failed")
        raise TransactionFailure("Expiry scan failed.") from e

    logger.info(
        "Expiry scan complete: %s item(s) checked, %s alert(s) created",
        len(items),
        alerts_created,
    )
    return ExpiryScanResult(items_checked=len(items), alerts_created=alerts_created)
