"""Item API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import DB, OptionalWorker
from app.config import settings
from app.schemas.item import ItemCreate, ItemUpdate, ItemResponse
from app.services.item_service import ItemService

router = APIRouter()


@router.get("", response_model=List[ItemResponse])
async def list_items(
    db: DB,
    count: Optional[int] = Query(None, ge=1),
):
    return await ItemService(db).list(count)


@router.get("/search", response_model=List[ItemResponse])
async def search_items(
    db: DB,
    query: Optional[str] = None,
    count: Optional[int] = Query(None, ge=1),
):
    """Substring search over SKU, name and category. An empty query lists everything."""
    return await ItemService(db).search(query, count)


@router.get("/low-stock", response_model=List[ItemResponse])
async def low_stock_items(
    db: DB,
    threshold: int = Query(settings.LOW_STOCK_THRESHOLD, ge=0),
    count: Optional[int] = Query(None, ge=1),
):
    """Items with quantity at or below the threshold, lowest first."""
    return await ItemService(db).low_stock(threshold, count)


@router.get("/{sku}", response_model=ItemResponse)
async def get_item(sku: str, db: DB):
    return await ItemService(db).get(sku)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    data: ItemCreate,
    db: DB,
    worker: OptionalWorker,
):
    """
    Create an item.

    Send an empty SKU or AUTO-GENERATE to have one generated. A SKU that
    is already in use is rejected with 409.
    """
    return await ItemService(db).create(data, worker)


@router.put("/{sku}", response_model=ItemResponse)
async def update_item(
    sku: str,
    data: ItemUpdate,
    db: DB,
    worker: OptionalWorker,
):
    return await ItemService(db).update(sku, data, worker)


@router.delete("/{sku}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    sku: str,
    db: DB,
    worker: OptionalWorker,
):
    await ItemService(db).delete(sku, worker)
