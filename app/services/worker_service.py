"""Service for worker accounts."""
from typing import List, Optional
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ConflictError
from app.core.security import get_password_hash
from app.models.worker import Worker, WorkerRole
from app.schemas.worker import WorkerCreate, WorkerUpdate, DEFAULT_DEPARTMENT


logger = logging.getLogger(__name__)


class WorkerService:
    """Worker CRUD with username/email uniqueness and last-admin protection."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, count: Optional[int] = None) -> List[Worker]:
        stmt = select(Worker).order_by(Worker.username)
        if count:
            stmt = stmt.limit(count)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, worker_id: int) -> Worker:
        worker = await self.db.get(Worker, worker_id)
        if worker is None:
            raise NotFoundError(f"Worker {worker_id} not found")
        return worker

    async def get_by_username(self, username: str) -> Optional[Worker]:
        result = await self.db.execute(select(Worker).where(Worker.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Worker]:
        result = await self.db.execute(
            select(Worker).where(func.lower(Worker.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def count_admins(self) -> int:
        """Active Admin accounts."""
        stmt = (
            select(func.count())
            .select_from(Worker)
            .where(Worker.role == WorkerRole.ADMIN.value, Worker.is_active.is_(True))
        )
        return await self.db.scalar(stmt) or 0

    async def _is_last_admin(self, worker: Worker) -> bool:
        return worker.is_admin and worker.is_active and await self.count_admins() <= 1

    async def create(self, data: WorkerCreate) -> Worker:
        """
        Create a worker.

        Raises:
            ConflictError: username or email already taken
        """
        if await self.get_by_username(data.username):
            raise ConflictError(f"Username '{data.username}' is already taken")
        if await self.get_by_email(data.email):
            raise ConflictError(f"Email '{data.email}' is already registered")

        worker = Worker(
            username=data.username,
            email=data.email,
            password_hash=get_password_hash(data.password),
            full_name=data.full_name,
            phone_number=data.phone_number,
            role=(data.role or WorkerRole.EMPLOYEE).value,
            department=data.department or DEFAULT_DEPARTMENT,
            is_active=True,
        )
        self.db.add(worker)
        await self.db.commit()
        await self.db.refresh(worker)

        logger.info(f"Worker {worker.username} created with role {worker.role}")
        return worker

    async def update(self, worker_id: int, data: WorkerUpdate) -> Worker:
        """
        Update a worker. The password is rehashed only when a new one is sent.

        Raises:
            NotFoundError: unknown worker
            ConflictError: email belongs to another worker, or the change
                demotes or deactivates the only active Admin
        """
        worker = await self.get(worker_id)
        changes = data.model_dump(exclude_unset=True, exclude={"password"})

        demoted = changes.get("role") is not None and WorkerRole(changes["role"]) != WorkerRole.ADMIN
        deactivated = changes.get("is_active") is False
        if (demoted or deactivated) and await self._is_last_admin(worker):
            raise ConflictError("Cannot demote or deactivate the last admin user")

        email = changes.get("email")
        if email and email.lower() != worker.email.lower():
            other = await self.get_by_email(email)
            if other is not None and other.id != worker.id:
                raise ConflictError(f"Email '{email}' is already registered")

        for field, value in changes.items():
            if value is None and field not in ("phone_number", "department"):
                continue
            if field == "role":
                value = WorkerRole(value).value
            setattr(worker, field, value)

        if data.password:
            worker.password_hash = get_password_hash(data.password)

        await self.db.commit()
        await self.db.refresh(worker)

        logger.info(f"Worker {worker.username} updated")
        return worker

    async def delete(self, worker_id: int) -> Worker:
        """
        Delete a worker.

        Raises:
            NotFoundError: unknown worker
            ConflictError: the worker is the only Admin left
        """
        worker = await self.get(worker_id)
        if await self._is_last_admin(worker):
            raise ConflictError("Cannot delete the last admin user")

        await self.db.delete(worker)
        await self.db.commit()

        logger.info(f"Worker {worker.username} deleted")
        return worker
