# qmedic/schemas/export.py
from datetime import datetime

from qmedic.models.export_log import ExportFormat, ExportStatus
from qmedic.schemas.base import CamelModel


class ExportLogResponse(CamelModel):
    id: int
    format: ExportFormat
    status: ExportStatus
    details: str | None
    user: str
    created_at: datetime
