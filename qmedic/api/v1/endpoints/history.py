# qmedic/api/v1/endpoints/history.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from qmedic.core.database import get_read_db
from qmedic.models.history import ActionKind
from qmedic.schemas.history import HistoryEntryResponse
from qmedic.services.history_service import list_history

router = APIRouter()


@router.get("", response_model=list[HistoryEntryResponse])
def get_history(
    item_id: Optional[str] = Query(None, alias="itemId", description="Only this item"),
    action: Optional[ActionKind] = Query(None, description="Only this action kind"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_read_db),
) -> list[HistoryEntryResponse]:
    """
    All transaction records, newest first.
    """
    entries = list_history(db, item_id=item_id, action=action, limit=limit)
    return [HistoryEntryResponse.model_validate(e) for e in entries]
