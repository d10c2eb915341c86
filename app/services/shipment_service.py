"""Service for inbound/outbound shipments and the items travelling with them."""
from typing import List, Optional, Tuple
from datetime import datetime, timedelta, timezone
import logging

from sqlalchemy import select, func, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.config import settings
from app.core.exceptions import NotFoundError, ConflictError, ValidationFailedError
from app.models.item import Item
from app.models.shipment import Shipment, ShipmentItem, ShipmentType, SHIPMENT_COMPLETED
from app.models.worker import Worker
from app.schemas.shipment import ShipmentCreate, ShipmentUpdate, ShipmentLine, ShipmentSummary
from app.services.activity_formatter import as_utc
from app.services.activity_service import ActivityService, actor_name, actor_id


logger = logging.getLogger(__name__)

MOVE_ACTION = "Move"
HIGH_PRIORITIES = ("high", "urgent")


class ShipmentService:
    """
    Shipment CRUD plus the item-location side effects of shipment lines.

    Lines move their item to the shipment (location = shipment id). Deleting
    the shipment, or dropping a line, returns the item to the default
    location. Every such move is written to the activity feed.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityService(db)

    # ==================== QUERIES ====================

    async def exists(self, shipment_id: str) -> bool:
        result = await self.db.execute(select(Shipment.id).where(Shipment.id == shipment_id))
        return result.scalar_one_or_none() is not None

    async def get(self, shipment_id: str) -> Shipment:
        shipment = await self.db.get(Shipment, shipment_id)
        if shipment is None:
            raise NotFoundError(f"Shipment {shipment_id} not found")
        return shipment

    async def list(
        self,
        type: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        partner: Optional[str] = None,
        search: Optional[str] = None,
        count: Optional[int] = None,
    ) -> List[Shipment]:
        """
        List shipments, ETA ascending.

        type/status/priority match case-insensitively; partner and search
        are case-insensitive substrings.
        """
        conditions = []

        if type:
            conditions.append(func.lower(Shipment.type) == type.lower())
        if status:
            conditions.append(func.lower(Shipment.status) == status.lower())
        if priority:
            conditions.append(func.lower(Shipment.priority) == priority.lower())
        if partner:
            conditions.append(Shipment.partner_name.ilike(f"%{partner}%"))
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            conditions.append(or_(
                Shipment.id.ilike(pattern),
                Shipment.partner_name.ilike(pattern),
                Shipment.type.ilike(pattern),
            ))

        stmt = select(Shipment)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = stmt.order_by(Shipment.eta, Shipment.id)
        if count:
            stmt = stmt.limit(count)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def history(self, count: Optional[int] = None) -> List[Shipment]:
        """Completed shipments, most recently completed first."""
        stmt = (
            select(Shipment)
            .where(Shipment.status == SHIPMENT_COMPLETED)
            .order_by(Shipment.completed_at.desc(), Shipment.id)
        )
        if count:
            stmt = stmt.limit(count)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def summary(self, now: Optional[datetime] = None) -> ShipmentSummary:
        """Dashboard counters; "today" is the current UTC calendar day."""
        now = as_utc(now) if now else datetime.now(timezone.utc)
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        tomorrow = today + timedelta(days=1)

        open_ = Shipment.status != SHIPMENT_COMPLETED
        eta_today = and_(Shipment.eta >= today, Shipment.eta < tomorrow)
        inbound = Shipment.type == ShipmentType.INBOUND.value
        outbound = Shipment.type == ShipmentType.OUTBOUND.value

        async def _count(*conditions) -> int:
            stmt = select(func.count()).select_from(Shipment).where(*conditions)
            return await self.db.scalar(stmt) or 0

        return ShipmentSummary(
            active_shipments=await _count(open_),
            high_priority=await _count(open_, func.lower(Shipment.priority).in_(HIGH_PRIORITIES)),
            pending_inbound=await _count(open_, inbound),
            pending_outbound=await _count(open_, outbound),
            arriving_today=await _count(open_, inbound, eta_today),
            departing_today=await _count(open_, outbound, eta_today),
            completed_today=await _count(
                Shipment.status == SHIPMENT_COMPLETED,
                Shipment.completed_at >= today,
                Shipment.completed_at < tomorrow,
            ),
        )

    # ==================== MUTATIONS ====================

    async def create(self, data: ShipmentCreate, worker: Optional[Worker] = None) -> Shipment:
        if await self.exists(data.id):
            raise ConflictError(f"A shipment with id {data.id} already exists")
        self._check_lines(data.items)

        actor = actor_name(worker)
        now = datetime.now(timezone.utc)
        shipment = Shipment(
            id=data.id,
            type=data.type.value,
            partner_name=data.partner_name,
            status=data.status,
            eta=as_utc(data.eta),
            priority=data.priority,
            notes=data.notes,
            created_at=now,
            created_by=actor,
        )
        if shipment.is_completed:
            shipment.completed_at = now
            shipment.completed_by = actor

        shipment.items = [
            ShipmentItem(sku=line.sku, quantity=line.quantity, notes=line.notes)
            for line in data.items
        ]
        self.db.add(shipment)

        moved = await self._move_to_shipment(shipment.id, [line.sku for line in data.items], actor)

        await self.db.commit()
        await self.db.refresh(shipment)
        logger.info(f"Created {shipment.type} shipment {shipment.id} with {len(shipment.items)} line(s)")

        await self._record_moves(moved, f"Item moved to shipment {shipment.id}", worker)
        await self.activity.try_record(
            "Created",
            f"Created new {shipment.type} shipment {shipment.id}",
            shipment.id,
            actor_id(worker),
        )
        return shipment

    async def update(
        self,
        shipment_id: str,
        data: ShipmentUpdate,
        worker: Optional[Worker] = None,
    ) -> Shipment:
        """
        Update a shipment.

        Completion is stamped only when the status enters "Completed" from
        another status; edits that keep it "Completed" preserve the stamp.
        When `items` is sent, it replaces the line list.
        """
        if data.id is not None and data.id != shipment_id:
            raise ValidationFailedError("Shipment id in body does not match the URL", ["id"])

        shipment = await self.get(shipment_id)
        actor = actor_name(worker)
        was_completed = shipment.is_completed

        changes = data.model_dump(exclude_unset=True, exclude={"id", "items"})
        for field, value in changes.items():
            if value is None and field != "notes":
                raise ValidationFailedError(f"{field} cannot be empty", [field])
            if field == "type":
                value = ShipmentType(value).value
            elif field == "eta":
                value = as_utc(value)
            setattr(shipment, field, value)

        if shipment.is_completed and not was_completed:
            shipment.completed_at = datetime.now(timezone.utc)
            shipment.completed_by = actor

        moved: List[str] = []
        returned: List[str] = []
        if data.items is not None:
            self._check_lines(data.items)
            moved, returned = await self._replace_lines(shipment, data.items, actor)

        try:
            await self.db.commit()
        except StaleDataError:
            await self.db.rollback()
            if not await self.exists(shipment_id):
                raise NotFoundError(f"Shipment {shipment_id} not found")
            raise

        await self.db.refresh(shipment)

        await self._record_moves(moved, f"Item moved to shipment {shipment.id}", worker)
        await self._record_moves(
            returned,
            f"Item returned to {settings.DEFAULT_ITEM_LOCATION} from shipment {shipment.id}",
            worker,
        )
        await self.activity.try_record(
            "Updated",
            f"Updated shipment {shipment.id} (status: {shipment.status})",
            shipment.id,
            actor_id(worker),
        )
        return shipment

    async def delete(self, shipment_id: str, worker: Optional[Worker] = None) -> Shipment:
        """Delete a shipment and return every item still at it to the default location."""
        shipment = await self.get(shipment_id)
        skus = [line.sku for line in shipment.items]

        returned = await self._return_to_default(shipment_id, skus, actor_name(worker))
        await self.db.delete(shipment)
        await self.db.commit()
        logger.info(f"Deleted shipment {shipment_id}; {len(returned)} item(s) returned")

        await self._record_moves(
            returned,
            f"Item returned to {settings.DEFAULT_ITEM_LOCATION} from deleted shipment {shipment_id}",
            worker,
        )
        await self.activity.try_record(
            "Deleted", f"Deleted shipment {shipment_id}", shipment_id, actor_id(worker)
        )
        return shipment

    # ==================== HELPERS ====================

    @staticmethod
    def _check_lines(lines: List[ShipmentLine]) -> None:
        skus = [line.sku for line in lines]
        if len(skus) != len(set(skus)):
            raise ValidationFailedError("Each SKU may appear only once per shipment", ["items"])

    async def _replace_lines(
        self,
        shipment: Shipment,
        lines: List[ShipmentLine],
        actor: str,
    ) -> Tuple[List[str], List[str]]:
        """Sync the line list in place; returns (moved skus, returned skus)."""
        wanted = {line.sku: line for line in lines}
        current = {line.sku: line for line in shipment.items}

        for sku, line in current.items():
            if sku in wanted:
                line.quantity = wanted[sku].quantity
                line.notes = wanted[sku].notes
            else:
                shipment.items.remove(line)

        for sku, line in wanted.items():
            if sku not in current:
                shipment.items.append(
                    ShipmentItem(sku=sku, quantity=line.quantity, notes=line.notes)
                )

        dropped = [sku for sku in current if sku not in wanted]
        moved = await self._move_to_shipment(shipment.id, list(wanted), actor)
        returned = await self._return_to_default(shipment.id, dropped, actor)
        return moved, returned

    async def _items(self, skus: List[str]) -> List[Item]:
        if not skus:
            return []
        result = await self.db.execute(select(Item).where(Item.sku.in_(skus)).order_by(Item.sku))
        return list(result.scalars().all())

    async def _move_to_shipment(self, shipment_id: str, skus: List[str], actor: str) -> List[str]:
        """Set location = shipment id on known items not already there. Unknown SKUs are skipped."""
        moved = []
        now = datetime.now(timezone.utc)
        for item in await self._items(skus):
            if item.location == shipment_id:
                continue
            item.location = shipment_id
            item.updated_at = now
            item.updated_by = actor
            moved.append(item.sku)
        return moved

    async def _return_to_default(self, shipment_id: str, skus: List[str], actor: str) -> List[str]:
        """Reset items still located at the shipment to the default location."""
        returned = []
        now = datetime.now(timezone.utc)
        for item in await self._items(skus):
            if item.location != shipment_id:
                continue
            item.location = settings.DEFAULT_ITEM_LOCATION
            item.updated_at = now
            item.updated_by = actor
            returned.append(item.sku)
        return returned

    async def _record_moves(self, skus: List[str], description: str, worker: Optional[Worker]) -> None:
        for sku in skus:
            await self.activity.try_record(MOVE_ACTION, description, sku, actor_id(worker))
