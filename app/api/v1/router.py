from fastapi import APIRouter

from app.api.v1.endpoints import (
    # Access Control
    auth,
    workers,
    # Inventory
    items,
    stocktakes,
    # Shipping
    shipments,
    # Activity Feed
    activity_logs,
    # Home Dashboard
    tasks,
)


# Create main API router
api_router = APIRouter(prefix="/api")

# ==================== Access Control ====================
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"]
)

api_router.include_router(
    workers.router,
    prefix="/workers",
    tags=["Workers"]
)

# ==================== Inventory ====================
api_router.include_router(
    items.router,
    prefix="/items",
    tags=["Items"]
)

api_router.include_router(
    stocktakes.router,
    prefix="/stocktakes",
    tags=["Stocktakes"]
)

# ==================== Shipping ====================
api_router.include_router(
    shipments.router,
    prefix="/shipments",
    tags=["Shipments"]
)

# ==================== Activity Feed ====================
api_router.include_router(
    activity_logs.router,
    prefix="/activitylogs",
    tags=["Activity Logs"]
)

# ==================== Home Dashboard ====================
api_router.include_router(
    tasks.router,
    prefix="/home/tasks",
    tags=["Tasks"]
)
