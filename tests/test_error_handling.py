import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import NotFoundError
from app.schemas.item import ItemUpdate
from app.schemas.shipment import ShipmentUpdate
from app.schemas.stocktake import StocktakeUpdate
from app.services.activity_service import ActivityService
from app.services.item_service import ItemService
from app.services.shipment_service import ShipmentService
from app.services.stocktake_service import StocktakeService

STOCKTAKE = {"zone": "B", "shelf": "B4", "counter": "jdoe"}
SHIPMENT = {
    "id": "OUT20250601001",
    "type": "Outbound",
    "partner_name": "Global Trading Co.",
    "status": "Pending",
    "priority": "High",
    "eta": "2030-01-15T09:00:00+00:00",
    "items": [],
}


async def _failing_record(self, *args, **kwargs):
    raise SQLAlchemyError("activity table unavailable")


async def test_activity_failure_does_not_fail_the_mutation(client, item_payload, monkeypatch):
    monkeypatch.setattr(ActivityService, "record", _failing_record)

    created = await client.post("/api/items", json=item_payload("ITEM-2001"))
    updated = await client.put("/api/items/ITEM-2001", json={"quantity": 7})

    assert created.status_code == 201
    assert updated.status_code == 200
    fetched = await client.get("/api/items/ITEM-2001")
    assert fetched.json()["quantity"] == 7

    monkeypatch.undo()
    assert (await client.get("/api/activitylogs")).json() == []


async def test_try_record_returns_none_on_failure(db, monkeypatch):
    monkeypatch.setattr(ActivityService, "record", _failing_record)

    assert await ActivityService(db).try_record("Add", "Added 1 Box") is None


async def test_update_of_concurrently_deleted_item_is_not_found(client, item_payload, session_factory):
    await client.post("/api/items", json=item_payload("ITEM-3001"))

    async with session_factory() as first, session_factory() as second:
        await ItemService(first).get("ITEM-3001")
        await ItemService(second).delete("ITEM-3001")

        with pytest.raises(NotFoundError):
            await ItemService(first).update("ITEM-3001", ItemUpdate(quantity=5))


async def test_update_of_concurrently_deleted_stocktake_is_not_found(client, session_factory):
    stocktake = (await client.post("/api/stocktakes", json=STOCKTAKE)).json()

    async with session_factory() as first, session_factory() as second:
        await StocktakeService(first).get(stocktake["id"])
        await StocktakeService(second).delete(stocktake["id"])

        with pytest.raises(NotFoundError):
            await StocktakeService(first).update(stocktake["id"], StocktakeUpdate(notes="recount"))


async def test_update_of_concurrently_deleted_shipment_is_not_found(client, session_factory):
    await client.post("/api/shipments", json=SHIPMENT)

    async with session_factory() as first, session_factory() as second:
        await ShipmentService(first).get("OUT20250601001")
        await ShipmentService(second).delete("OUT20250601001")

        with pytest.raises(NotFoundError):
            await ShipmentService(first).update("OUT20250601001", ShipmentUpdate(status="Processing"))


async def test_unknown_route_uses_error_body(client):
    response = await client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json()["error"] == "Not Found"


async def test_auth_failures_use_error_body(client, admin_headers):
    anonymous = await client.get("/api/workers")

    assert anonymous.status_code == 401
    assert anonymous.json()["error"]
    assert "detail" not in anonymous.json()

    await client.post(
        "/api/workers",
        json={
            "username": "jdoe",
            "password": "secret123",
            "email": "jdoe@warehouse.com",
            "full_name": "Jane Doe",
        },
        headers=admin_headers,
    )
    login = await client.post("/api/auth/login", json={"username": "jdoe", "password": "secret123"})
    client.cookies.clear()
    forbidden = await client.get(
        "/api/workers", headers={"Authorization": f"Bearer {login.json()['access_token']}"}
    )

    assert forbidden.status_code == 403
    assert forbidden.json()["error"]
