# qmedic/schemas/item.py
from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any

from pydantic import ConfigDict, Field, StringConstraints, field_validator

from qmedic.models.item import ItemCategory, ItemStatus
from qmedic.schemas.base import CamelModel

ItemCodeStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=50),
]

NameStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=255),
]

LocationStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=255),
]


class ItemCreate(CamelModel):
    """Used when registering a new item."""

    item_id: ItemCodeStr
    name: NameStr
    category: ItemCategory

    quantity: int = Field(default=0, ge=0)
    min_quantity: int = Field(default=0, ge=0)
    expiry_date: date | None = None
    location: LocationStr = ""

    model_config = ConfigDict(extra="forbid")


class ItemUpdate(CamelModel):
    """
    Used when updating an item (PATCH).
    All fields optional; the scan code itself cannot change.
    """

    name: NameStr | None = None
    category: ItemCategory | None = None

    quantity: int | None = Field(default=None, ge=0)
    min_quantity: int | None = Field(default=None, ge=0)
    expiry_date: date | None = None
    location: LocationStr | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("expiry_date", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ItemResponse(CamelModel):
    id: int
    item_id: str
    name: str
    category: ItemCategory
    quantity: int
    min_quantity: int
    status: ItemStatus
    expiry_date: date | None
    location: str
    last_scanned: datetime | None


class InventorySummary(CamelModel):
    checked_in: int = 0
    checked_out: int = 0
    low_stock_count: int = 0


class InventoryListResponse(CamelModel):
    items: list[ItemResponse]
    summary: InventorySummary
