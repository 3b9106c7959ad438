# qmedic/api/v1/endpoints/exports.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from qmedic.core.config import get_settings
from qmedic.core.database import get_db, get_read_db
from qmedic.schemas.export import ExportLogResponse
from qmedic.services.export_service import export_inventory_csv, list_exports

router = APIRouter()


@router.get("/csv")
def export_csv(
    user: Optional[str] = Query(None, description="Who requested the export"),
    db: Session = Depends(get_db),
):
    """
    Export the inventory to CSV.
    """
    settings = get_settings()
    if user is None:
        user = settings.export_default_user
    content = export_inventory_csv(db, user=user)

    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="inventory.csv"'},
    )


@router.get("/history", response_model=list[ExportLogResponse])
def export_history(db: Session = Depends(get_read_db)) -> list[ExportLogResponse]:
    return [ExportLogResponse.model_validate(e) for e in list_exports(db)]
