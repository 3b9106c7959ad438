# qmedic/services/history_service.py
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from qmedic.models.history import ActionKind, InventoryHistory
from qmedic.models.item import InventoryItem


def append_history(
    db: Session,
    *,
    item: InventoryItem,
    action: ActionKind,
    quantity: int,
    case_id: Optional[str],
    user: str,
    action_date: datetime,
) -> InventoryHistory:
    """
    Add a history entry to the current transaction. The caller commits.
    """
    entry = InventoryHistory(
        item_fk=item.id,
        item_id=item.item_id,
        item_name=item.name,
        category=item.category,
        action=action,
        quantity=quantity,
        case_id=case_id,
        user=user,
        action_date=action_date,
    )
    db.add(entry)
    db.flush()
    return entry


def list_history(
    db: Session,
    *,
    item_id: Optional[str] = None,
    action: Optional[ActionKind] = None,
    limit: Optional[int] = None,
) -> list[InventoryHistory]:
    query = db.query(InventoryHistory)

    if item_id:
        query = query.filter(InventoryHistory.item_id == item_id)
    if action:
        query = query.filter(InventoryHistory.action == action)

    query = query.order_by(InventoryHistory.action_date.desc(), InventoryHistory.id.desc())
    if limit:
        query = query.limit(limit)

    return query.all()
