from datetime import datetime, timedelta, timezone

from app.models.activity_log import ActivityLog
from app.services.activity_service import ActivityService


async def test_recent_returns_min_of_count_and_total_newest_first(db):
    service = ActivityService(db)
    for i in range(4):
        await service.record("Update", f"Updated entry {i}")

    three = await service.recent(3)
    everything = await service.recent(10)

    assert len(three) == 3
    assert len(everything) == 4
    timestamps = [log.timestamp for log in everything]
    assert timestamps == sorted(timestamps, reverse=True)
    assert everything[0].description == "Updated entry 3"


async def test_record_resolves_user_name(db, admin_headers, client):
    service = ActivityService(db)
    me = (await client.get("/api/auth/me", headers=admin_headers)).json()

    system = await service.record("Add", "Added 1 Box (A)")
    known = await service.record("Add", "Added 1 Box (B)", user_id=str(me["id"]))
    unknown = await service.record("Add", "Added 1 Box (C)", user_id="9999")

    assert system.user_name == "System"
    assert known.user_name == me["username"]
    assert unknown.user_name == "Unknown User"


async def test_stock_movement_buckets_by_day(db):
    now = datetime(2026, 3, 11, 12, 0, tzinfo=timezone.utc)
    db.add_all([
        ActivityLog(action_type="Add", description="Added 5 Box", timestamp=now - timedelta(days=1, hours=3)),
        ActivityLog(action_type="Remove", description="Deleted Box", timestamp=now - timedelta(hours=4)),
        ActivityLog(action_type="Update", description="Updated Box", timestamp=now - timedelta(hours=1)),
        ActivityLog(action_type="Add", description="Added 1 Mug", timestamp=now - timedelta(days=9)),
    ])
    await db.commit()

    movement = await ActivityService(db).stock_movement(7, now=now)

    assert len(movement["days"]) == 7
    assert movement["days"][-1] == now.strftime("%a")
    assert movement["inbound"] == [0, 0, 0, 0, 0, 1, 0]
    assert movement["outbound"] == [0, 0, 0, 0, 0, 0, 1]


async def test_stock_movement_endpoint(client):
    await client.post("/api/activitylogs", json={"action_type": "Add", "description": "Added 3 Foam"})
    await client.post("/api/activitylogs", json={"action_type": "remove", "description": "Deleted Foam"})

    response = await client.get("/api/activitylogs/stockmovement", params={"days": 3})

    assert response.status_code == 200
    data = response.json()
    assert len(data["days"]) == 3
    assert sum(data["inbound"]) == 1
    assert sum(data["outbound"]) == 1
    assert data["inbound"][-1] == 1


async def test_category_filter_matches_description_or_sku(client):
    entries = [
        {"action_type": "Add", "description": "Added 10 Coffee Mug", "item_sku": "ITEM-3001"},
        {"action_type": "Move", "description": "Item moved to shipment IN1", "item_sku": "MUG-77"},
        {"action_type": "Add", "description": "Added 4 Standard Box", "item_sku": "ITEM-1001"},
    ]
    for entry in entries:
        response = await client.post("/api/activitylogs", json=entry)
        assert response.status_code == 201

    response = await client.get("/api/activitylogs/recent", params={"category": "mug", "count": 10})

    assert response.status_code == 200
    skus = {log["item_sku"] for log in response.json()}
    assert skus == {"ITEM-3001", "MUG-77"}


async def test_list_endpoints_and_display_fields(client):
    await client.post(
        "/api/activitylogs",
        json={"action_type": "Login", "description": "admin logged in", "user_id": "1"},
    )
    await client.post(
        "/api/activitylogs",
        json={"action_type": "Add", "description": "Added 2 Foam", "item_sku": "ITEM-1002"},
    )

    by_type = (await client.get("/api/activitylogs/type/login")).json()
    by_item = (await client.get("/api/activitylogs/item/ITEM-1002")).json()
    by_user = (await client.get("/api/activitylogs/user/1")).json()
    recent = (await client.get("/api/activitylogs/recent", params={"count": 1})).json()

    assert [log["action_type"] for log in by_type] == ["Login"]
    assert by_item[0]["item_link"] == "/items/ITEM-1002"
    assert by_item[0]["relative_time"] == "Just now"
    assert by_user[0]["description"] == "admin logged in"
    assert len(recent) == 1
    assert recent[0]["title"] == "Added"


async def test_out_of_range_user_id_is_unknown_user(client):
    for user_id in ("99999999999999999999", "2147483648", "-1"):
        response = await client.post(
            "/api/activitylogs",
            json={"action_type": "Update", "description": "Adjusted count", "user_id": user_id},
        )

        assert response.status_code == 201
        assert response.json()["user_name"] == "Unknown User"
