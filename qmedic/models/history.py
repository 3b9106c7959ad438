# qmedic/models/history.py
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from qmedic.models.base import Base
from qmedic.models.item import ITEM_CATEGORY_ENUM, ItemCategory


class StockEffect(str, PyEnum):
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    NONE = "NONE"  # location-only actions never touch quantity


class ActionKind(str, PyEnum):
    CHECK_IN = "Check In"
    CHECK_OUT = "Check Out"
    USE = "Use"
    TRANSFER = "Transfer"
    REMOVE_ALL = "Remove All"

    @property
    def stock_effect(self) -> StockEffect:
        return STOCK_EFFECTS[self]

    @property
    def reduces_stock(self) -> bool:
        return self.stock_effect is StockEffect.SUBTRACT

    def apply(self, current: int, amount: int) -> int:
        """
        Quantity after applying this action to `current`.

        Over-withdrawal is clamped to zero rather than rejected.
        """
        effect = self.stock_effect
        if effect is StockEffect.ADD:
            updated = current + amount
        elif effect is StockEffect.SUBTRACT:
            updated = current - amount
        else:
            updated = current
        return max(0, updated)


STOCK_EFFECTS: dict[ActionKind, StockEffect] = {
    ActionKind.CHECK_IN: StockEffect.ADD,
    ActionKind.CHECK_OUT: StockEffect.SUBTRACT,
    ActionKind.USE: StockEffect.SUBTRACT,
    ActionKind.REMOVE_ALL: StockEffect.SUBTRACT,
    ActionKind.TRANSFER: StockEffect.NONE,
}

ACTION_KIND_ENUM = Enum(
    ActionKind,
    name="action_kind_enum",
    native_enum=False,
    length=20,
    values_callable=lambda enum_cls: [m.value for m in enum_cls],
)


class InventoryHistory(Base):
    """
    Immutable record of one applied inventory action.

    Item name, code and category are copied at action time so the entry
    still reads correctly after the item is renamed or deleted.
    """

    __tablename__ = "inventory_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    item_fk: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Snapshot
    item_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[ItemCategory] = mapped_column(ITEM_CATEGORY_ENUM, nullable=False)

    action: Mapped[ActionKind] = mapped_column(ACTION_KIND_ENUM, nullable=False)
    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        doc="Requested magnitude, not the applied delta.",
    )
    case_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    user: Mapped[str] = mapped_column(String(255), nullable=False)

    action_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
