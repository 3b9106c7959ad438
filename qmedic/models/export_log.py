# qmedic/models/export_log.py
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    DateTime,
    Enum,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from qmedic.models.base import Base


class ExportFormat(str, PyEnum):
    CSV = "CSV"


class ExportStatus(str, PyEnum):
    SUCCESS = "Success"
    FAILED = "Failed"


class ExportLog(Base):
    """
    One row per inventory export attempt, successful or not.
    """

    __tablename__ = "export_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    format: Mapped[ExportFormat] = mapped_column(
        Enum(
            ExportFormat,
            name="export_format_enum",
            native_enum=False,
            length=10,
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
    )
    status: Mapped[ExportStatus] = mapped_column(
        Enum(
            ExportStatus,
            name="export_status_enum",
            native_enum=False,
            length=10,
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
    )
    details: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    user: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
