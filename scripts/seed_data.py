"""Seed demo data: items, shipments with lines, tasks and their activity entries."""
import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, func

from app.database import async_session_factory, init_db
from app.database_init import seed_default_admin
from app.models import (
    Item, Shipment, ShipmentItem, ActivityLog, WarehouseTask,
    TaskStatus, TaskPriority,
)
from app.services.activity_service import SYSTEM_USER


ITEMS = [
    ("ITEM-1001", "Standard Box", "Packaging", "Shelf A1", 100),
    ("ITEM-1002", "Protective Foam", "Packaging", "Shelf A2", 50),
    ("ITEM-2001", "T-Shirt (Medium)", "Apparel", "Shelf B1", 200),
    ("ITEM-3001", "Coffee Mug", "Kitchenware", "Shelf C1", 75),
]

# (id, type, partner, status, priority, eta offset days, notes)
SHIPMENTS = [
    ("IN20250601001", "Inbound", "ACME Supplies", "Processing", "Medium", 3, "Standard delivery"),
    ("OUT20250601001", "Outbound", "XYZ Corporation", "Pending", "High", 1, "Expedited delivery"),
    ("IN20250601002", "Inbound", "Global Trading Co.", "In Transit", "Low", 5, "Bulk delivery"),
]

# (shipment id, sku, quantity, notes)
SHIPMENT_LINES = [
    ("IN20250601001", "ITEM-1001", 20, "Handle with care"),
    ("IN20250601001", "ITEM-1002", 15, "For packaging electronics"),
    ("OUT20250601001", "ITEM-2001", 50, "Customer order #12345"),
    ("OUT20250601001", "ITEM-3001", 25, "Promotional items"),
    ("IN20250601002", "ITEM-1001", 100, "Bulk order"),
]


def _log(action_type: str, description: str, sku: str, now: datetime) -> ActivityLog:
    return ActivityLog(
        action_type=action_type,
        description=description,
        item_sku=sku,
        user_name=SYSTEM_USER,
        timestamp=now,
    )


async def seed():
    """Seed demo data into an empty database."""
    await init_db()

    async with async_session_factory() as db:
        try:
            print("Seeding data...")
            await seed_default_admin(db)

            if await db.scalar(select(func.count()).select_from(Item)):
                print("Items already exist. Nothing to seed.")
                return

            now = datetime.now(timezone.utc)

            # 1. Items
            print("Creating items...")
            items = {}
            for sku, name, category, location, quantity in ITEMS:
                item = Item(
                    sku=sku,
                    name=name,
                    category=category,
                    condition="New",
                    location=location,
                    quantity=quantity,
                    created_at=now,
                    updated_at=now,
                )
                db.add(item)
                db.add(_log("Add", f"Added test item {sku} - {name}", sku, now))
                items[sku] = item

            # 2. Shipments
            print("Creating shipments...")
            shipments = {}
            for shipment_id, type_, partner, status, priority, days, notes in SHIPMENTS:
                shipment = Shipment(
                    id=shipment_id,
                    type=type_,
                    partner_name=partner,
                    status=status,
                    priority=priority,
                    eta=now + timedelta(days=days),
                    notes=notes,
                    created_at=now,
                    items=[],
                )
                db.add(shipment)
                db.add(_log("Created", f"Created test {type_} shipment {shipment_id}", shipment_id, now))
                shipments[shipment_id] = shipment

            # 3. Shipment lines
            print("Creating shipment lines...")
            for shipment_id, sku, quantity, notes in SHIPMENT_LINES:
                shipment = shipments[shipment_id]
                shipment.items.append(ShipmentItem(sku=sku, quantity=quantity, notes=notes))
                action_type = "Add" if shipment.type == "Inbound" else "Remove"
                db.add(_log(
                    action_type,
                    f"Added {quantity} {items[sku].name} to {shipment.type} shipment {shipment_id}",
                    sku,
                    now,
                ))

            # 4. Tasks
            print("Creating tasks...")
            db.add(WarehouseTask(
                title="Receive ACME delivery",
                description="Unload and check shipment IN20250601001",
                due_date=now + timedelta(days=3),
                priority=TaskPriority.HIGH.value,
                category="Receiving",
                related_shipment_id="IN20250601001",
            ))
            db.add(WarehouseTask(
                title="Restock packaging",
                description="Move foam from overflow to Shelf A2",
                due_date=now,
                status=TaskStatus.IN_PROGRESS.value,
                related_item_sku="ITEM-1002",
            ))

            await db.commit()
            print("Seed data created successfully!")

        except Exception as e:
            await db.rollback()
            print(f"Error seeding data: {e}")
            raise


if __name__ == "__main__":
    asyncio.run(seed())
