# qmedic/api/v1/endpoints/actions.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from qmedic.core.action_context import ActionContext
from qmedic.core.config import get_settings
from qmedic.core.database import get_db
from qmedic.schemas.action import ActionLogRequest, ActionLogResponse
from qmedic.services.action_service import apply_action
from qmedic.utils.id_generators import generate_case_id

router = APIRouter()


@router.post("/log", response_model=ActionLogResponse)
def log_action(
    payload: ActionLogRequest,
    db: Session = Depends(get_db),
) -> ActionLogResponse:
    """
    Log an inventory action (Check In, Check Out, Use, Transfer, Remove All)
    and update the item's quantity.
    """
    settings = get_settings()
    context = ActionContext(
        user=payload.user if payload.user is not None else settings.default_action_user,
        case_id=payload.case_id if payload.case_id is not None else generate_case_id(),
    )

    result = apply_action(
        db,
        scan_code=payload.item_id,
        action=payload.action,
        quantity=payload.quantity,
        context=context,
    )

    return ActionLogResponse(
        message="Action logged and inventory updated.",
        new_quantity=result.new_quantity,
        status=result.status,
        history_id=result.history_id,
        low_stock_alert=result.alert_id is not None,
    )
