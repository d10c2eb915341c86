# Services module
from app.services.activity_service import ActivityService
from app.services.auth_service import AuthService
from app.services.item_service import ItemService
from app.services.shipment_service import ShipmentService
from app.services.stocktake_service import StocktakeService
from app.services.task_service import TaskService
from app.services.worker_service import WorkerService

__all__ = [
    "ActivityService",
    "AuthService",
    "ItemService",
    "ShipmentService",
    "StocktakeService",
    "TaskService",
    "WorkerService",
]
