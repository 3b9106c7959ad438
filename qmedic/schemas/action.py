# qmedic/schemas/action.py
from pydantic import ConfigDict, Field

from qmedic.models.history import ActionKind
from qmedic.models.item import ItemStatus
from qmedic.schemas.base import CamelModel


class ActionLogRequest(CamelModel):
    """
    One scan: which item, what happened to it, and how many units.
    """

    item_id: str = Field(min_length=1, max_length=50)
    action: ActionKind
    quantity: int = Field(gt=0)
    case_id: str | None = Field(default=None, max_length=50)
    user: str | None = Field(default=None, max_length=255)

    model_config = ConfigDict(extra="ignore")


class ActionLogResponse(CamelModel):
    message: str
    new_quantity: int
    status: ItemStatus
    history_id: int
    low_stock_alert: bool
