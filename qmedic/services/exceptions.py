# qmedic/services/exceptions.py
"""
Error taxonomy for inventory operations.

- ItemNotFound:       scan code did not resolve; nothing was written.
- InvalidInput:       rejected before touching storage.
- TransactionFailure: storage error during an atomic sequence; fully rolled back.
"""


class InventoryError(Exception):
    """Base class for errors raised by inventory services."""


class ItemNotFound(InventoryError):
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item ID {item_id} not found.")


class InvalidInput(InventoryError):
    pass


class DuplicateItem(InventoryError):
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"An item with ID {item_id} already exists.")


class AlertNotFound(InventoryError):
    def __init__(self, alert_id: int):
        self.alert_id = alert_id
        super().__init__(f"Notification {alert_id} not found.")


class TransactionFailure(InventoryError):
    def __init__(self, message: str = "Failed to complete inventory transaction."):
        super().__init__(message)
