# qmedic/api/v1/router.py
from fastapi import APIRouter

from qmedic.api.v1.endpoints import (
    actions,
    inventory,
    history,
    notifications,
    exports,
    tasks,
)

api_router = APIRouter()

api_router.include_router(actions.router, prefix="/action", tags=["actions"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(history.router, prefix="/history", tags=["history"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(exports.router, prefix="/export", tags=["export"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
