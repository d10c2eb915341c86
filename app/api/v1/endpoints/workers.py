"""Worker administration endpoints (Admin only)."""
from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import DB, AdminWorker
from app.schemas.worker import WorkerCreate, WorkerUpdate, WorkerResponse
from app.services.worker_service import WorkerService

router = APIRouter()


@router.get("", response_model=List[WorkerResponse])
async def list_workers(
    db: DB,
    admin: AdminWorker,
    count: Optional[int] = Query(None, ge=1),
):
    return await WorkerService(db).list(count)


@router.get("/{worker_id}", response_model=WorkerResponse)
async def get_worker(worker_id: int, db: DB, admin: AdminWorker):
    return await WorkerService(db).get(worker_id)


@router.post("", response_model=WorkerResponse, status_code=status.HTTP_201_CREATED)
async def create_worker(
    data: WorkerCreate,
    db: DB,
    admin: AdminWorker,
):
    """Create a worker. Username and email must be unused."""
    return await WorkerService(db).create(data)


@router.put("/{worker_id}", response_model=WorkerResponse)
async def update_worker(
    worker_id: int,
    data: WorkerUpdate,
    db: DB,
    admin: AdminWorker,
):
    return await WorkerService(db).update(worker_id, data)


@router.delete("/{worker_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_worker(
    worker_id: int,
    db: DB,
    admin: AdminWorker,
):
    """Delete a worker. The last Admin cannot be deleted."""
    await WorkerService(db).delete(worker_id)
