# qmedic/api/v1/endpoints/inventory.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from qmedic.core.database import get_db, get_read_db
from qmedic.models.item import ItemCategory
from qmedic.schemas.item import (
    InventoryListResponse,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
)
from qmedic.services import item_service

router = APIRouter()


@router.get("", response_model=InventoryListResponse)
def list_inventory(
    category: Optional[ItemCategory] = Query(None, description="Filter by category"),
    search: Optional[str] = Query(None, description="Search by name or item ID"),
    db: Session = Depends(get_read_db),
) -> InventoryListResponse:
    """
    All items with their derived status, plus dashboard totals.
    """
    items = item_service.list_items(db, category=category, search=search)
    summary = item_service.get_inventory_summary(db)

    return InventoryListResponse(
        items=[ItemResponse.model_validate(item) for item in items],
        summary=summary,
    )


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: ItemCreate,
    db: Session = Depends(get_db),
) -> ItemResponse:
    item = item_service.create_item(db, payload)
    return ItemResponse.model_validate(item)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: str, db: Session = Depends(get_read_db)) -> ItemResponse:
    item = item_service.get_item_or_404(db, item_id)
    return ItemResponse.model_validate(item)


@router.patch("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: str,
    payload: ItemUpdate,
    db: Session = Depends(get_db),
) -> ItemResponse:
    """
    Partial update of item details (name, threshold, expiry, location...).
    """
    item = item_service.update_item(db, item_id, payload)
    return ItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: str, db: Session = Depends(get_db)) -> Response:
    """
    Delete an item. Its history and alerts are kept.
    """
    item_service.delete_item(db, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
