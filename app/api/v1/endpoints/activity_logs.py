"""Activity feed API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import DB, OptionalWorker
from app.config import settings
from app.schemas.activity_log import ActivityLogCreate, ActivityLogResponse, StockMovementResponse
from app.services.activity_formatter import present
from app.services.activity_service import ActivityService, actor_id

router = APIRouter()


@router.get("", response_model=List[ActivityLogResponse])
async def list_activity_logs(
    db: DB,
    count: int = Query(100, ge=1),
    category: Optional[str] = None,
):
    """
    Newest entries first.

    `category` is matched as a case-insensitive substring of the
    description or item SKU.
    """
    logs = await ActivityService(db).recent(count, category)
    return [present(log) for log in logs]


@router.get("/recent", response_model=List[ActivityLogResponse])
async def recent_activity_logs(
    db: DB,
    count: int = Query(5, ge=1),
    category: Optional[str] = None,
):
    logs = await ActivityService(db).recent(count, category)
    return [present(log) for log in logs]


@router.get("/type/{action_type}", response_model=List[ActivityLogResponse])
async def activity_logs_by_type(
    action_type: str,
    db: DB,
    count: int = Query(10, ge=1),
):
    logs = await ActivityService(db).by_type(action_type, count)
    return [present(log) for log in logs]


@router.get("/item/{sku}", response_model=List[ActivityLogResponse])
async def activity_logs_by_item(
    sku: str,
    db: DB,
    count: int = Query(10, ge=1),
):
    logs = await ActivityService(db).by_item(sku, count)
    return [present(log) for log in logs]


@router.get("/user/{user_id}", response_model=List[ActivityLogResponse])
async def activity_logs_by_user(
    user_id: str,
    db: DB,
    count: int = Query(10, ge=1),
):
    logs = await ActivityService(db).by_user(user_id, count)
    return [present(log) for log in logs]


@router.get("/stockmovement", response_model=StockMovementResponse)
async def stock_movement(
    db: DB,
    days: int = Query(settings.STOCK_MOVEMENT_WINDOW_DAYS, ge=1, le=366),
):
    """Per-day counts of Add (inbound) and Remove (outbound) entries."""
    return await ActivityService(db).stock_movement(days)


@router.post("", response_model=ActivityLogResponse, status_code=status.HTTP_201_CREATED)
async def create_activity_log(
    data: ActivityLogCreate,
    db: DB,
    worker: OptionalWorker,
):
    """Append an entry. Without an explicit user_id it is attributed to the caller."""
    log = await ActivityService(db).record(
        data.action_type,
        data.description,
        data.item_sku,
        data.user_id or actor_id(worker),
    )
    return present(log)
