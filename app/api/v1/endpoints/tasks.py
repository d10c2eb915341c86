"""Home dashboard task endpoints (signed-in workers only)."""
from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import DB, CurrentWorker
from app.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from app.services.task_service import TaskService

router = APIRouter()


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    db: DB,
    current_worker: CurrentWorker,
    count: Optional[int] = Query(None, ge=1),
):
    return await TaskService(db).list(count)


@router.get("/today", response_model=List[TaskResponse])
async def todays_tasks(db: DB, current_worker: CurrentWorker):
    """Tasks created or due today: High priority first, open before done, newest first."""
    return await TaskService(db).today()


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, db: DB, current_worker: CurrentWorker):
    return await TaskService(db).get(task_id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    db: DB,
    current_worker: CurrentWorker,
):
    return await TaskService(db).create(data, current_worker)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    data: TaskUpdate,
    db: DB,
    current_worker: CurrentWorker,
):
    return await TaskService(db).update(task_id, data, current_worker)


@router.put("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(
    task_id: int,
    db: DB,
    current_worker: CurrentWorker,
):
    return await TaskService(db).complete(task_id, current_worker)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    db: DB,
    current_worker: CurrentWorker,
):
    await TaskService(db).delete(task_id, current_worker)
