# qmedic/models/__init__.py
from qmedic.models.item import InventoryItem, ItemCategory, ItemStatus, derive_status
from qmedic.models.history import ActionKind, InventoryHistory, StockEffect
from qmedic.models.alert import AlertType, NotificationLog
from qmedic.models.export_log import ExportFormat, ExportLog, ExportStatus
