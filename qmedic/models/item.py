# qmedic/models/item.py
from datetime import date, datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    Integer,
    String,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from qmedic.models.base import Base


class ItemCategory(str, PyEnum):
    MEDICATION = "Medication"
    EQUIPMENT = "Equipment"
    SUPPLIES = "Supplies"


class ItemStatus(str, PyEnum):
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"


def derive_status(quantity: int, min_quantity: int) -> ItemStatus:
    """
    Stock status is a pure function of quantity and threshold.
    It is never persisted.
    """
    if quantity <= 0:
        return ItemStatus.OUT_OF_STOCK
    if quantity < min_quantity:
        return ItemStatus.LOW_STOCK
    return ItemStatus.IN_STOCK


ITEM_CATEGORY_ENUM = Enum(
    ItemCategory,
    name="item_category_enum",
    native_enum=False,
    length=20,
    values_callable=lambda enum_cls: [m.value for m in enum_cls],
)


class InventoryItem(Base):
    """
    A medication, piece of equipment or consumable, identified by the
    code printed on its barcode (item_id).
    """

    __tablename__ = "inventory_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    item_id: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
        doc="Scan code, e.g. MED001.",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[ItemCategory] = mapped_column(ITEM_CATEGORY_ENUM, nullable=False)

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        server_default=text("0"),
    )
    min_quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        server_default=text("0"),
    )

    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        server_default=text("''"),
    )
    last_scanned: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.now(),
    )

    @property
    def status(self) -> ItemStatus:
        return derive_status(self.quantity, self.min_quantity)
