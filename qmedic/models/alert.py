# qmedic/models/alert.py
from datetime import date, datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    false,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from qmedic.models.base import Base


class AlertType(str, PyEnum):
    LOW_STOCK = "Low Stock"
    EXPIRY_15_DAY = "15-Day Expiry Warning"
    EXPIRY_7_DAY = "7-Day Expiry Warning"


ALERT_TYPE_ENUM = Enum(
    AlertType,
    name="alert_type_enum",
    native_enum=False,
    length=40,
    values_callable=lambda enum_cls: [m.value for m in enum_cls],
)


class NotificationLog(Base):
    """
    System-raised alert about an item.

    Created once and never deleted; only is_read changes afterwards.
    """

    __tablename__ = "notification_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    item_fk: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    alert_type: Mapped[AlertType] = mapped_column(ALERT_TYPE_ENUM, nullable=False)

    # Snapshot at alert time
    item_id_at_alert: Mapped[str] = mapped_column(String(50), nullable=False)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    expiry_date_at_alert: Mapped[date | None] = mapped_column(Date, nullable=True)
    details: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    is_read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=false(),
        default=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
