"""Service for physical stock counts."""
from typing import List, Optional
from datetime import datetime, timezone
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import NotFoundError, ConflictError, ValidationFailedError
from app.models.stocktake import Stocktake, StocktakeStatus
from app.models.worker import Worker
from app.schemas.stocktake import StocktakeCreate, StocktakeUpdate
from app.services.activity_service import ActivityService, actor_id


logger = logging.getLogger(__name__)


class StocktakeService:
    """Stocktakes start "In Progress" and are completed once through complete()."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityService(db)

    async def exists(self, stocktake_id: int) -> bool:
        result = await self.db.execute(select(Stocktake.id).where(Stocktake.id == stocktake_id))
        return result.scalar_one_or_none() is not None

    async def get(self, stocktake_id: int) -> Stocktake:
        stocktake = await self.db.get(Stocktake, stocktake_id)
        if stocktake is None:
            raise NotFoundError(f"Stocktake {stocktake_id} not found")
        return stocktake

    async def list(self, status: Optional[str] = None, count: Optional[int] = None) -> List[Stocktake]:
        """Newest first."""
        stmt = select(Stocktake)
        if status:
            stmt = stmt.where(Stocktake.status == status)
        stmt = stmt.order_by(Stocktake.started_at.desc(), Stocktake.id.desc())
        if count:
            stmt = stmt.limit(count)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, data: StocktakeCreate, worker: Optional[Worker] = None) -> Stocktake:
        stocktake = Stocktake(
            zone=data.zone,
            shelf=data.shelf,
            counter=data.counter,
            notes=data.notes,
            status=StocktakeStatus.IN_PROGRESS.value,
            started_at=datetime.now(timezone.utc),
        )
        self.db.add(stocktake)
        await self.db.commit()
        await self.db.refresh(stocktake)

        logger.info(f"Started stocktake {stocktake.id} for zone {stocktake.zone}/{stocktake.shelf}")
        await self.activity.try_record(
            "Stocktake",
            f"Started stocktake of zone {stocktake.zone}, shelf {stocktake.shelf} by {stocktake.counter}",
            None,
            actor_id(worker),
        )
        return stocktake

    async def update(
        self,
        stocktake_id: int,
        data: StocktakeUpdate,
        worker: Optional[Worker] = None,
    ) -> Stocktake:
        if data.id is not None and data.id != stocktake_id:
            raise ValidationFailedError("Stocktake id in body does not match the URL", ["id"])

        stocktake = await self.get(stocktake_id)
        changes = data.model_dump(exclude_unset=True, exclude={"id"})
        for field, value in changes.items():
            if value is None and field != "notes":
                raise ValidationFailedError(f"{field} cannot be empty", [field])
            if field == "status":
                value = StocktakeStatus(value).value
            setattr(stocktake, field, value)

        if stocktake.status == StocktakeStatus.COMPLETED.value and stocktake.completed_at is None:
            stocktake.completed_at = datetime.now(timezone.utc)

        await self._commit(stocktake_id)
        await self.db.refresh(stocktake)
        return stocktake

    async def complete(self, stocktake_id: int, worker: Optional[Worker] = None) -> Stocktake:
        """Move an in-progress stocktake to Completed, stamping completed_at."""
        stocktake = await self.get(stocktake_id)
        if stocktake.status != StocktakeStatus.IN_PROGRESS.value:
            raise ConflictError(
                f"Stocktake {stocktake_id} is {stocktake.status} and cannot be completed"
            )

        stocktake.status = StocktakeStatus.COMPLETED.value
        stocktake.completed_at = datetime.now(timezone.utc)
        await self._commit(stocktake_id)
        await self.db.refresh(stocktake)

        logger.info(f"Completed stocktake {stocktake_id}")
        await self.activity.try_record(
            "Stocktake",
            f"Completed stocktake of zone {stocktake.zone}, shelf {stocktake.shelf}",
            None,
            actor_id(worker),
        )
        return stocktake

    async def delete(self, stocktake_id: int, worker: Optional[Worker] = None) -> Stocktake:
        stocktake = await self.get(stocktake_id)
        await self.db.delete(stocktake)
        await self.db.commit()

        logger.info(f"Deleted stocktake {stocktake_id}")
        await self.activity.try_record(
            "Stocktake",
            f"Deleted stocktake of zone {stocktake.zone}, shelf {stocktake.shelf}",
            None,
            actor_id(worker),
        )
        return stocktake

    async def _commit(self, stocktake_id: int) -> None:
        try:
            await self.db.commit()
        except StaleDataError:
            await self.db.rollback()
            if not await self.exists(stocktake_id):
                raise NotFoundError(f"Stocktake {stocktake_id} not found")
            raise
