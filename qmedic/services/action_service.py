# qmedic/services/action_service.py
"""
Inventory action transaction.

A scan (item code + action + quantity) is applied as one unit of work:

1. Lock the item row by scan code
2. Compute the new quantity from the action's stock effect (floor 0)
3. Update quantity and last_scanned
4. Append a history entry
5. Append a Low Stock alert if a stock-reducing action left the item
   at or below its minimum
6. Commit, or roll everything back
"""

import logging
from typing import Any, NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from qmedic.core.action_context import ActionContext
from qmedic.models.alert import AlertType
from qmedic.models.history import ActionKind
from qmedic.models.item import ItemStatus, derive_status
from qmedic.services.alert_service import append_alert
from qmedic.services.exceptions import InvalidInput, ItemNotFound, TransactionFailure
from qmedic.services.history_service import append_history
from qmedic.services.item_service import invalidate_summary_cache, lock_item_by_code
from qmedic.utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)


class ActionResult(NamedTuple):
    new_quantity: int
    status: ItemStatus
    history_id: int
    alert_id: Optional[int]


def validate_action_input(action: Any, quantity: Any) -> ActionKind:
    """
    Reject bad input before any storage access.

    Returns the action as an ActionKind.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidInput("Quantity must be a positive integer.")

    try:
        return ActionKind(action)
    except ValueError:
        raise InvalidInput(f"Unknown action: {action!r}.")


def apply_action(
    db: Session,
    *,
    scan_code: str,
    action: Any,
    quantity: Any,
    context: ActionContext,
) -> ActionResult:
    """
    Apply one inventory action atomically.

    Raises:
        InvalidInput: non-positive quantity or unknown action (nothing read or written)
        ItemNotFound: scan code matched no item (nothing written)
        TransactionFailure: storage error; the transaction was rolled back
    """
    kind = validate_action_input(action, quantity)

    try:
        item = lock_item_by_code(db, scan_code)
        if item is None:
            raise ItemNotFound(scan_code)

        new_quantity = kind.apply(item.quantity, quantity)
        now = utc_now()

        item.quantity = new_quantity
        item.last_scanned = now
        db.flush()

        entry = append_history(
            db,
            item=item,
            action=kind,
            quantity=quantity,
            case_id=context.case_id,
            user=context.user,
            action_date=now,
        )

        # Threshold may have been edited since the row was loaded
        db.refresh(item, attribute_names=["min_quantity"])
        min_quantity = item.min_quantity

        alert_id = None
        if kind.reduces_stock and new_quantity <= min_quantity:
            alert = append_alert(
                db,
                item=item,
                alert_type=AlertType.LOW_STOCK,
                details=(
                    f"Quantity is {new_quantity}, which is at or below "
                    f"the minimum of {min_quantity}."
                ),
            )
            alert_id = alert.id

        history_id = entry.id
        db.commit()

    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(
            "Inventory transaction failed item_id=%s action=%s", scan_code, kind.value
        )
        raise TransactionFailure() from e
    except Exception:
        db.rollback()
        raise

    if alert_id is not None:
        logger.info(
            "Low stock notification logged for item %s (quantity=%s, minimum=%s)",
            scan_code,
            new_quantity,
            min_quantity,
        )

    invalidate_summary_cache()

    return ActionResult(
        new_quantity=new_quantity,
        status=derive_status(new_quantity, min_quantity),
        history_id=history_id,
        alert_id=alert_id,
    )
