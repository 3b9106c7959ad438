# qmedic/schemas/history.py
from datetime import datetime

from qmedic.models.history import ActionKind
from qmedic.models.item import ItemCategory
from qmedic.schemas.base import CamelModel


class HistoryEntryResponse(CamelModel):
    id: int
    item_id: str
    item_name: str
    category: ItemCategory
    action: ActionKind
    quantity: int
    case_id: str | None
    user: str
    action_date: datetime
