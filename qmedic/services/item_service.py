# qmedic/services/item_service.py
import json
import logging
from typing import Optional

from sqlalchemy import and_, case, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from qmedic.core.config import get_settings
from qmedic.core.redis import cache_delete, cache_get, cache_incr, cache_set
from qmedic.models.history import ActionKind, InventoryHistory
from qmedic.models.item import InventoryItem, ItemCategory
from qmedic.schemas.item import InventorySummary, ItemCreate, ItemUpdate
from qmedic.services.exceptions import DuplicateItem, ItemNotFound, TransactionFailure

logger = logging.getLogger(__name__)

SUMMARY_CACHE_KEY = "inventory:summary"
# Bumped on every invalidation; a summary computed under an older
# generation is never written back.
SUMMARY_GENERATION_KEY = "inventory:summary:gen"


def find_item_by_code(db: Session, item_id: str) -> Optional[InventoryItem]:
    return db.query(InventoryItem).filter(InventoryItem.item_id == item_id).first()


def lock_item_by_code(db: Session, item_id: str) -> Optional[InventoryItem]:
    """
    Load an item and hold its row lock until the surrounding transaction ends.

    populate_existing makes sure we see the committed row, not a copy left
    in the identity map by an earlier read on this session.
    """
    return (
        db.query(InventoryItem)
        .filter(InventoryItem.item_id == item_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def get_item_or_404(db: Session, item_id: str) -> InventoryItem:
    item = find_item_by_code(db, item_id)
    if not item:
        raise ItemNotFound(item_id)
    return item


def list_items(
    db: Session,
    *,
    category: Optional[ItemCategory] = None,
    search: Optional[str] = None,
) -> list[InventoryItem]:
    query = db.query(InventoryItem)

    if category:
        query = query.filter(InventoryItem.category == category)

    if search and search.strip():
        search_term = f"%{search.strip()}%"
        query = query.filter(
            or_(
                InventoryItem.name.ilike(search_term),
                InventoryItem.item_id.ilike(search_term),
            )
        )

    return query.order_by(InventoryItem.item_id.asc()).all()


def create_item(db: Session, payload: ItemCreate) -> InventoryItem:
    if find_item_by_code(db, payload.item_id):
        raise DuplicateItem(payload.item_id)

    item = InventoryItem(
        item_id=payload.item_id,
        name=payload.name,
        category=payload.category,
        quantity=payload.quantity,
        min_quantity=payload.min_quantity,
        expiry_date=payload.expiry_date,
        location=payload.location,
    )

    try:
        db.add(item)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateItem(payload.item_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create item item_id=%s", payload.item_id)
        raise TransactionFailure("Failed to create inventory item.")

    db.refresh(item)
    invalidate_summary_cache()
    return item


def update_item(db: Session, item_id: str, payload: ItemUpdate) -> InventoryItem:
    """
    Partial update of item attributes.

    Quantity can be corrected here directly; such corrections are not
    actions and leave no history entry.
    """
    item = get_item_or_404(db, item_id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None or field == "expiry_date":
            setattr(item, field, value)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update item item_id=%s", item_id)
        raise TransactionFailure("Failed to update inventory item.")

    db.refresh(item)
    invalidate_summary_cache()
    return item


def delete_item(db: Session, item_id: str) -> None:
    """
    Delete an item. History entries and alerts keep their snapshots;
    their item reference is set to NULL.
    """
    item = get_item_or_404(db, item_id)

    try:
        db.delete(item)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete item item_id=%s", item_id)
        raise TransactionFailure("Failed to delete inventory item.")

    invalidate_summary_cache()


def _compute_summary(db: Session) -> InventorySummary:
    checked_in, checked_out = db.query(
        func.coalesce(
            func.sum(
                case(
                    (InventoryHistory.action == ActionKind.CHECK_IN, InventoryHistory.quantity),
                    else_=0,
                )
            ),
            0,
        ),
        func.coalesce(
            func.sum(
                case(
                    (InventoryHistory.action != ActionKind.CHECK_IN, InventoryHistory.quantity),
                    else_=0,
                )
            ),
            0,
        ),
    ).one()

    # Same rule as derive_status(): 0 < quantity < min_quantity
    low_stock_count = (
        db.query(func.count(InventoryItem.id))
        .filter(
            and_(
                InventoryItem.quantity > 0,
                InventoryItem.quantity < InventoryItem.min_quantity,
            )
        )
        .scalar()
    )

    return InventorySummary(
        checked_in=int(checked_in),
        checked_out=int(checked_out),
        low_stock_count=int(low_stock_count or 0),
    )


def get_inventory_summary(db: Session) -> InventorySummary:
    """
    Dashboard totals. Cached in Redis when available.
    """
    cached = cache_get(SUMMARY_CACHE_KEY)
    if cached:
        try:
            return InventorySummary.model_validate(json.loads(cached))
        except ValueError:
            logger.warning("Discarding unreadable summary cache entry")

    generation = cache_get(SUMMARY_GENERATION_KEY)
    summary = _compute_summary(db)

    if cache_get(SUMMARY_GENERATION_KEY) != generation:
        # Inventory changed while we were counting; serve but do not cache
        return summary

    settings = get_settings()
    cache_set(
        SUMMARY_CACHE_KEY,
        summary.model_dump_json(),
        ttl=settings.summary_cache_ttl_seconds,
    )
    return summary


def invalidate_summary_cache() -> None:
    cache_incr(SUMMARY_GENERATION_KEY)
    cache_delete(SUMMARY_CACHE_KEY)
