"""Service for warehouse to-do tasks."""
from typing import List, Optional
from datetime import datetime, timedelta, timezone
import logging

from sqlalchemy import select, case, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationFailedError
from app.models.task import WarehouseTask, TaskStatus, TaskPriority
from app.models.worker import Worker
from app.schemas.task import TaskCreate, TaskUpdate
from app.services.activity_formatter import as_utc
from app.services.activity_service import ActivityService, actor_id


logger = logging.getLogger(__name__)


class TaskService:
    """Task CRUD; every mutation is echoed to the activity feed."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityService(db)

    async def get(self, task_id: int) -> WarehouseTask:
        task = await self.db.get(WarehouseTask, task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    async def list(self, count: Optional[int] = None) -> List[WarehouseTask]:
        """Newest first."""
        stmt = select(WarehouseTask).order_by(
            WarehouseTask.created_at.desc(), WarehouseTask.id.desc()
        )
        if count:
            stmt = stmt.limit(count)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def today(self, now: Optional[datetime] = None) -> List[WarehouseTask]:
        """
        Tasks created or due on the current UTC day.

        Ordered High priority first, then incomplete before completed, then
        most recently created.
        """
        now = as_utc(now) if now else datetime.now(timezone.utc)
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)

        stmt = (
            select(WarehouseTask)
            .where(or_(
                and_(WarehouseTask.created_at >= start, WarehouseTask.created_at < end),
                and_(WarehouseTask.due_date >= start, WarehouseTask.due_date < end),
            ))
            .order_by(
                case((WarehouseTask.priority == TaskPriority.HIGH.value, 0), else_=1),
                case((WarehouseTask.status == TaskStatus.COMPLETED.value, 1), else_=0),
                WarehouseTask.created_at.desc(),
                WarehouseTask.id.desc(),
            )
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, data: TaskCreate, worker: Optional[Worker] = None) -> WarehouseTask:
        now = datetime.now(timezone.utc)
        task = WarehouseTask(
            title=data.title,
            description=data.description,
            due_date=as_utc(data.due_date),
            status=data.status.value,
            priority=data.priority.value,
            category=data.category or "General",
            assigned_to=data.assigned_to,
            related_item_sku=data.related_item_sku,
            related_shipment_id=data.related_shipment_id,
            created_at=now,
            updated_at=now,
        )
        if task.is_completed:
            task.completed_at = now

        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)

        logger.info(f"Created task {task.id}: {task.title}")
        await self._record("Task Created", f"Task '{task.title}' was created", task, worker)
        return task

    async def update(
        self,
        task_id: int,
        data: TaskUpdate,
        worker: Optional[Worker] = None,
    ) -> WarehouseTask:
        """
        Update a task.

        Entering Completed stamps completed_at (once); leaving Completed
        clears it.
        """
        if data.id is not None and data.id != task_id:
            raise ValidationFailedError("Task id in body does not match the URL", ["id"])

        task = await self.get(task_id)
        changes = data.model_dump(exclude_unset=True, exclude={"id"})
        for field, value in changes.items():
            if value is None and field in ("title", "due_date", "status", "priority", "category"):
                raise ValidationFailedError(f"{field} cannot be empty", [field])
            if field in ("status", "priority"):
                value = value.value
            elif field == "due_date":
                value = as_utc(value)
            setattr(task, field, value)

        if task.is_completed:
            if task.completed_at is None:
                task.completed_at = datetime.now(timezone.utc)
        else:
            task.completed_at = None

        task.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(task)

        await self._record("Task Updated", f"Task '{task.title}' was updated", task, worker)
        return task

    async def complete(self, task_id: int, worker: Optional[Worker] = None) -> WarehouseTask:
        """Mark a task Completed. An existing completion time is kept."""
        task = await self.get(task_id)
        now = datetime.now(timezone.utc)

        task.status = TaskStatus.COMPLETED.value
        if task.completed_at is None:
            task.completed_at = now
        task.updated_at = now

        await self.db.commit()
        await self.db.refresh(task)

        logger.info(f"Completed task {task.id}")
        await self._record("Task Completed", f"Task '{task.title}' was completed", task, worker)
        return task

    async def delete(self, task_id: int, worker: Optional[Worker] = None) -> WarehouseTask:
        task = await self.get(task_id)
        await self.db.delete(task)
        await self.db.commit()

        logger.info(f"Deleted task {task_id}")
        await self._record("Task Deleted", f"Task '{task.title}' was deleted", task, worker)
        return task

    async def _record(
        self,
        action_type: str,
        description: str,
        task: WarehouseTask,
        worker: Optional[Worker],
    ) -> None:
        await self.activity.try_record(
            action_type, description, task.related_item_sku, actor_id(worker)
        )
