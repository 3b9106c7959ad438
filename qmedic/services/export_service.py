# qmedic/services/export_service.py
import csv
import logging
from io import StringIO

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from qmedic.models.export_log import ExportFormat, ExportLog, ExportStatus
from qmedic.models.item import InventoryItem
from qmedic.services.exceptions import TransactionFailure

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "item_id",
    "name",
    "category",
    "quantity",
    "min_quantity",
    "expiry_date",
    "location",
]


def log_export(
    db: Session,
    *,
    export_format: ExportFormat,
    status: ExportStatus,
    details: str | None,
    user: str,
) -> ExportLog:
    entry = ExportLog(format=export_format, status=status, details=details, user=user)
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to write export log format=%s", export_format.value)
        raise TransactionFailure("Failed to record export.")
    db.refresh(entry)
    return entry


def render_inventory_csv(items: list[InventoryItem]) -> str:
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_FIELDS)
    for item in items:
        writer.writerow(
            [
                item.item_id,
                item.name,
                item.category.value,
                item.quantity,
                item.min_quantity,
                item.expiry_date.isoformat() if item.expiry_date else "",
                item.location,
            ]
        )
    return output.getvalue()


def export_inventory_csv(db: Session, *, user: str) -> str:
    """
    Render the whole inventory as CSV and record the attempt in export_log.
    A failed export is logged with the error text before re-raising; if
    that log row cannot be written either, the export error still wins.
    """
    try:
        items = db.query(InventoryItem).order_by(InventoryItem.item_id.asc()).all()
        content = render_inventory_csv(items)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("CSV export failed")
        try:
            log_export(
                db,
                export_format=ExportFormat.CSV,
                status=ExportStatus.FAILED,
                details=str(e)[:1000],
                user=user,
            )
        except TransactionFailure:
            logger.warning("Could not record failed CSV export for %s", user)
        raise TransactionFailure("Error generating CSV file.") from e

    log_export(
        db,
        export_format=ExportFormat.CSV,
        status=ExportStatus.SUCCESS,
        details=f"Exported {len(items)} items.",
        user=user,
    )
    logger.info("CSV export of %s items by %s", len(items), user)
    return content


def list_exports(db: Session) -> list[ExportLog]:
    return (
        db.query(ExportLog)
        .order_by(ExportLog.created_at.desc(), ExportLog.id.desc())
        .all()
    )
