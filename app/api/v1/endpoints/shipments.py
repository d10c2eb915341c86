"""Shipment API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import DB, OptionalWorker
from app.schemas.shipment import ShipmentCreate, ShipmentUpdate, ShipmentResponse, ShipmentSummary
from app.services.shipment_service import ShipmentService

router = APIRouter()


# ==================== LISTS & FILTERS ====================

@router.get("", response_model=List[ShipmentResponse])
async def list_shipments(
    db: DB,
    type: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    count: Optional[int] = Query(None, ge=1),
):
    """
    List shipments by ETA.

    Filters:
    - type: Inbound / Outbound
    - status: exact status, any case
    - search: substring of id, partner or type
    """
    return await ShipmentService(db).list(type=type, status=status, search=search, count=count)


@router.get("/search", response_model=List[ShipmentResponse])
async def search_shipments(
    db: DB,
    query: Optional[str] = None,
    count: Optional[int] = Query(None, ge=1),
):
    return await ShipmentService(db).list(search=query, count=count)


@router.get("/summary", response_model=ShipmentSummary)
async def shipment_summary(db: DB):
    """Dashboard counters for today."""
    return await ShipmentService(db).summary()


@router.get("/history", response_model=List[ShipmentResponse])
async def shipment_history(
    db: DB,
    count: Optional[int] = Query(None, ge=1),
):
    """Completed shipments, newest completion first."""
    return await ShipmentService(db).history(count)


@router.get("/status/{shipment_status}", response_model=List[ShipmentResponse])
async def shipments_by_status(
    shipment_status: str,
    db: DB,
    count: Optional[int] = Query(None, ge=1),
):
    return await ShipmentService(db).list(status=shipment_status, count=count)


@router.get("/type/{shipment_type}", response_model=List[ShipmentResponse])
async def shipments_by_type(
    shipment_type: str,
    db: DB,
    count: Optional[int] = Query(None, ge=1),
):
    return await ShipmentService(db).list(type=shipment_type, count=count)


@router.get("/priority/{priority}", response_model=List[ShipmentResponse])
async def shipments_by_priority(
    priority: str,
    db: DB,
    count: Optional[int] = Query(None, ge=1),
):
    return await ShipmentService(db).list(priority=priority, count=count)


@router.get("/partner/{partner_name}", response_model=List[ShipmentResponse])
async def shipments_by_partner(
    partner_name: str,
    db: DB,
    count: Optional[int] = Query(None, ge=1),
):
    return await ShipmentService(db).list(partner=partner_name, count=count)


# ==================== CRUD ====================

@router.get("/{shipment_id}", response_model=ShipmentResponse)
async def get_shipment(shipment_id: str, db: DB):
    return await ShipmentService(db).get(shipment_id)


@router.post("", response_model=ShipmentResponse, status_code=status.HTTP_201_CREATED)
async def create_shipment(
    data: ShipmentCreate,
    db: DB,
    worker: OptionalWorker,
):
    """Create a shipment; each line moves its item to the shipment."""
    return await ShipmentService(db).create(data, worker)


@router.put("/{shipment_id}", response_model=ShipmentResponse)
async def update_shipment(
    shipment_id: str,
    data: ShipmentUpdate,
    db: DB,
    worker: OptionalWorker,
):
    return await ShipmentService(db).update(shipment_id, data, worker)


@router.delete("/{shipment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shipment(
    shipment_id: str,
    db: DB,
    worker: OptionalWorker,
):
    """Delete a shipment; its items go back to the default location."""
    await ShipmentService(db).delete(shipment_id, worker)
