from datetime import datetime, timezone
from typing import Optional, List
import logging
import random

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import NotFoundError, ConflictError, ValidationFailedError
from app.models.item import Item
from app.models.worker import Worker
from app.schemas.item import ItemCreate, ItemUpdate, AUTO_GENERATE_SKU
from app.services.activity_service import ActivityService, actor_name, actor_id


logger = logging.getLogger(__name__)


class ItemService:
    """Inventory item persistence with SKU uniqueness rules."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityService(db)

    async def exists(self, sku: str) -> bool:
        result = await self.db.execute(select(Item.sku).where(Item.sku == sku))
        return result.scalar_one_or_none() is not None

    async def get(self, sku: str) -> Item:
        item = await self.db.get(Item, sku)
        if item is None:
            raise NotFoundError(f"Item {sku} not found")
        return item

    async def list(self, count: Optional[int] = None) -> List[Item]:
        stmt = select(Item).order_by(Item.sku)
        if count:
            stmt = stmt.limit(count)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def search(self, query: Optional[str], count: Optional[int] = None) -> List[Item]:
        """Case-insensitive substring search over SKU, name and category."""
        if not query or not query.strip():
            return await self.list(count)

        pattern = f"%{query.strip()}%"
        stmt = (
            select(Item)
            .where(or_(
                Item.sku.ilike(pattern),
                Item.name.ilike(pattern),
                Item.category.ilike(pattern),
            ))
            .order_by(Item.sku)
        )
        if count:
            stmt = stmt.limit(count)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def low_stock(self, threshold: int, count: Optional[int] = None) -> List[Item]:
        stmt = select(Item).where(Item.quantity <= threshold).order_by(Item.quantity, Item.sku)
        if count:
            stmt = stmt.limit(count)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def generate_unique_sku(self, prefix: str = "SKU") -> str:
        """SKU-<4 random digits>-<3 time digits>, retried until unused."""
        while True:
            random_part = random.randint(1000, 9999)
            time_part = f"{datetime.now(timezone.utc).microsecond % 1000:03d}"
            sku = f"{prefix}-{random_part}-{time_part}"
            if not await self.exists(sku):
                return sku

    async def create(self, data: ItemCreate, worker: Optional[Worker] = None) -> Item:
        """
        Create an item.

        A blank SKU or AUTO-GENERATE gets a generated one. An explicit SKU
        that already exists is rejected; the existing item is never touched.
        """
        sku = (data.sku or "").strip()
        if not sku or sku == AUTO_GENERATE_SKU:
            sku = await self.generate_unique_sku()
        elif await self.exists(sku):
            raise ConflictError(f"An item with SKU {sku} already exists")

        actor = actor_name(worker)
        now = datetime.now(timezone.utc)
        item = Item(
            sku=sku,
            name=data.name,
            category=data.category,
            quantity=data.quantity,
            location=data.location,
            condition=data.condition,
            notes=data.notes,
            created_at=now,
            updated_at=now,
            created_by=actor,
            updated_by=actor,
        )
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)

        logger.info(f"Created item {item.sku} ({item.name}) by {actor}")
        await self.activity.try_record(
            "Add",
            f"Added {item.quantity} {item.name} ({item.sku})",
            item.sku,
            actor_id(worker),
        )
        return item

    async def update(self, sku: str, data: ItemUpdate, worker: Optional[Worker] = None) -> Item:
        """Read-modify-write of an item; the SKU itself is immutable."""
        if data.sku is not None and data.sku != sku:
            raise ValidationFailedError("SKU in body does not match the URL", ["sku"])

        item = await self.get(sku)
        changes = data.model_dump(exclude_unset=True, exclude={"sku"})
        for field, value in changes.items():
            if value is None and field != "notes":
                raise ValidationFailedError(f"{field} cannot be empty", [field])
            setattr(item, field, value)

        item.updated_at = datetime.now(timezone.utc)
        item.updated_by = actor_name(worker)

        try:
            await self.db.commit()
        except StaleDataError:
            await self.db.rollback()
            if not await self.exists(sku):
                raise NotFoundError(f"Item {sku} not found")
            raise

        await self.db.refresh(item)
        await self.activity.try_record(
            "Update", f"Updated {item.name} ({item.sku})", item.sku, actor_id(worker)
        )
        return item

    async def delete(self, sku: str, worker: Optional[Worker] = None) -> Item:
        item = await self.get(sku)
        await self.db.delete(item)
        await self.db.commit()
        logger.info(f"Deleted item {sku}")
        await self.activity.try_record(
            "Remove", f"Deleted {item.name} ({item.sku})", item.sku, actor_id(worker)
        )
        return item
