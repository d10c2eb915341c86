from datetime import datetime, timedelta, timezone
from typing import Optional, List, Dict, Any
import logging

from sqlalchemy import select, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityLog
from app.models.worker import Worker
from app.services.activity_formatter import as_utc


logger = logging.getLogger(__name__)

SYSTEM_USER = "System"
UNKNOWN_USER = "Unknown User"

INBOUND_ACTION = "Add"
OUTBOUND_ACTION = "Remove"

# Worker.id is a 32-bit INTEGER column
_MAX_WORKER_ID = 2**31 - 1


class ActivityService:
    """
    Append-only activity feed.

    Entries are immutable once written: there is no update or delete path.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self,
        action_type: str,
        description: str,
        item_sku: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> ActivityLog:
        """
        Append an entry stamped with the current time.

        Args:
            action_type: Free-text tag (Add, Remove, Update, Move, Login, ...)
            description: Human-readable description
            item_sku: Weak reference to the affected item (or shipment id)
            user_id: Worker id of the actor, if any

        Returns:
            The stored ActivityLog entry

        Storage errors propagate to the caller.
        """
        logger.debug(f"Logging activity: {action_type} - {description}")

        log = ActivityLog(
            action_type=action_type,
            description=description,
            item_sku=item_sku,
            user_id=user_id,
            user_name=await self._resolve_user_name(user_id),
            timestamp=datetime.now(timezone.utc),
        )
        self.db.add(log)
        await self.db.commit()
        await self.db.refresh(log)

        logger.info(f"Activity logged: {log.id} - {action_type}")
        return log

    async def try_record(
        self,
        action_type: str,
        description: str,
        item_sku: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Optional[ActivityLog]:
        """
        Record an entry describing a mutation that has already committed.

        The entry is written in its own session, so a failure here never
        rolls back or expires anything in the caller's unit of work. The
        failure is logged, not raised.
        """
        try:
            async with AsyncSession(self.db.bind, expire_on_commit=False) as session:
                return await ActivityService(session).record(
                    action_type, description, item_sku, user_id
                )
        except SQLAlchemyError:
            logger.exception(f"Failed to record activity '{action_type}': {description}")
            return None

    async def recent(self, count: int = 5, category: Optional[str] = None) -> List[ActivityLog]:
        """Up to `count` newest entries, optionally narrowed by category."""
        logger.debug(f"Getting {count} recent activities (category: {category})")

        stmt = select(ActivityLog)
        if category:
            stmt = stmt.where(self._category_filter(category))
        return await self._newest(stmt, count)

    async def by_type(self, action_type: str, count: int = 10) -> List[ActivityLog]:
        """Entries whose action type equals `action_type`, ignoring case."""
        logger.debug(f"Getting {count} activities of type {action_type}")

        stmt = select(ActivityLog).where(
            func.lower(ActivityLog.action_type) == action_type.lower()
        )
        return await self._newest(stmt, count)

    async def by_item(self, item_sku: str, count: int = 10) -> List[ActivityLog]:
        logger.debug(f"Getting {count} activities for item {item_sku}")

        stmt = select(ActivityLog).where(ActivityLog.item_sku == item_sku)
        return await self._newest(stmt, count)

    async def by_user(self, user_id: str, count: int = 10) -> List[ActivityLog]:
        logger.debug(f"Getting {count} activities for user {user_id}")

        stmt = select(ActivityLog).where(ActivityLog.user_id == user_id)
        return await self._newest(stmt, count)

    async def stock_movement(
        self,
        window_days: int = 7,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Count Add (inbound) and Remove (outbound) entries per UTC calendar day.

        The window covers the last `window_days` days up to the end of today
        (tomorrow at midnight, exclusive). Labels are short day names.
        """
        now = as_utc(now) if now else datetime.now(timezone.utc)
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start = today - timedelta(days=window_days - 1)
        end = today + timedelta(days=1)

        dates = [(start + timedelta(days=i)).date() for i in range(window_days)]
        index = {d: i for i, d in enumerate(dates)}
        inbound = [0] * window_days
        outbound = [0] * window_days

        stmt = select(ActivityLog.action_type, ActivityLog.timestamp).where(
            func.lower(ActivityLog.action_type).in_(
                [INBOUND_ACTION.lower(), OUTBOUND_ACTION.lower()]
            ),
            ActivityLog.timestamp >= start,
            ActivityLog.timestamp < end,
        )
        result = await self.db.execute(stmt)

        for action_type, timestamp in result.all():
            slot = index.get(as_utc(timestamp).date())
            if slot is None:
                continue
            if action_type.lower() == INBOUND_ACTION.lower():
                inbound[slot] += 1
            else:
                outbound[slot] += 1

        return {
            "days": [d.strftime("%a") for d in dates],
            "inbound": inbound,
            "outbound": outbound,
        }

    @staticmethod
    def _category_filter(category: str):
        """There is no category column: match description or SKU substrings."""
        pattern = f"%{category}%"
        return or_(
            ActivityLog.description.ilike(pattern),
            ActivityLog.item_sku.ilike(pattern),
        )

    async def _newest(self, stmt, count: int) -> List[ActivityLog]:
        stmt = stmt.order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc()).limit(count)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _resolve_user_name(self, user_id: Optional[str]) -> str:
        if user_id is None:
            return SYSTEM_USER

        try:
            worker_id = int(user_id)
        except ValueError:
            return UNKNOWN_USER
        if not 0 < worker_id <= _MAX_WORKER_ID:
            return UNKNOWN_USER

        worker = await self.db.get(Worker, worker_id)
        return worker.username if worker else UNKNOWN_USER


def actor_name(worker: Optional[Worker]) -> str:
    """Name stamped into created_by/updated_by style audit columns."""
    return worker.username if worker else SYSTEM_USER


def actor_id(worker: Optional[Worker]) -> Optional[str]:
    return str(worker.id) if worker else None
