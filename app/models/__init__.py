from app.models.item import Item
from app.models.shipment import Shipment, ShipmentItem, ShipmentType, SHIPMENT_COMPLETED
from app.models.stocktake import Stocktake, StocktakeStatus
from app.models.worker import Worker, WorkerRole
from app.models.activity_log import ActivityLog
from app.models.task import WarehouseTask, TaskStatus, TaskPriority

__all__ = [
    "Item",
    "Shipment",
    "ShipmentItem",
    "ShipmentType",
    "SHIPMENT_COMPLETED",
    "Stocktake",
    "StocktakeStatus",
    "Worker",
    "WorkerRole",
    "ActivityLog",
    "WarehouseTask",
    "TaskStatus",
    "TaskPriority",
]
