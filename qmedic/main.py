# qmedic/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from qmedic.api.v1.router import api_router
from qmedic.core.config import get_settings
from qmedic.services.exceptions import (
    AlertNotFound,
    DuplicateItem,
    InvalidInput,
    InventoryError,
    ItemNotFound,
    TransactionFailure,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="QMedic Inventory Backend",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_STATUS = {
    ItemNotFound: status.HTTP_404_NOT_FOUND,
    AlertNotFound: status.HTTP_404_NOT_FOUND,
    InvalidInput: 422,
    DuplicateItem: status.HTTP_409_CONFLICT,
    TransactionFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    """
    Map service errors to HTTP responses.
    Storage details never leave the server; TransactionFailure carries a generic message.
    """
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/health", tags=["health"])
async def root_health() -> dict:
    """
    Global health check endpoint.
    """
    return {"status": "ok", "environment": settings.app_env}


# Mount versioned API router
app.include_router(api_router, prefix=settings.api_v1_prefix)
