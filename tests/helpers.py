from sqlalchemy.orm import Session

from qmedic.models.item import InventoryItem


def count_rows(db: Session, model) -> int:
    return db.query(model).count()


def get_item(db: Session, item_id: str) -> InventoryItem:
    return (
        db.query(InventoryItem)
        .filter(InventoryItem.item_id == item_id)
        .populate_existing()
        .one()
    )
