"""Stocktake API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import DB, OptionalWorker
from app.models.stocktake import StocktakeStatus
from app.schemas.stocktake import StocktakeCreate, StocktakeUpdate, StocktakeResponse
from app.services.stocktake_service import StocktakeService

router = APIRouter()


@router.get("", response_model=List[StocktakeResponse])
async def list_stocktakes(
    db: DB,
    stocktake_status: Optional[StocktakeStatus] = Query(None, alias="status"),
    count: Optional[int] = Query(None, ge=1),
):
    return await StocktakeService(db).list(
        stocktake_status.value if stocktake_status else None, count
    )


@router.get("/{stocktake_id}", response_model=StocktakeResponse)
async def get_stocktake(stocktake_id: int, db: DB):
    return await StocktakeService(db).get(stocktake_id)


@router.post("", response_model=StocktakeResponse, status_code=status.HTTP_201_CREATED)
async def create_stocktake(
    data: StocktakeCreate,
    db: DB,
    worker: OptionalWorker,
):
    """Start a stocktake. It is created In Progress."""
    return await StocktakeService(db).create(data, worker)


@router.put("/{stocktake_id}", response_model=StocktakeResponse)
async def update_stocktake(
    stocktake_id: int,
    data: StocktakeUpdate,
    db: DB,
    worker: OptionalWorker,
):
    return await StocktakeService(db).update(stocktake_id, data, worker)


@router.post("/{stocktake_id}/complete", response_model=StocktakeResponse)
async def complete_stocktake(
    stocktake_id: int,
    db: DB,
    worker: OptionalWorker,
):
    """Complete an in-progress stocktake; anything else is a 409."""
    return await StocktakeService(db).complete(stocktake_id, worker)


@router.delete("/{stocktake_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stocktake(
    stocktake_id: int,
    db: DB,
    worker: OptionalWorker,
):
    await StocktakeService(db).delete(stocktake_id, worker)
