from datetime import datetime, timedelta, timezone


def task_payload(title="Count shelf A", **overrides):
    payload = {
        "title": title,
        "due_date": (datetime.now(timezone.utc) + timedelta(days=2)).isoformat(),
    }
    payload.update(overrides)
    return payload


async def test_tasks_require_login(client):
    assert (await client.get("/api/home/tasks")).status_code == 401
    assert (await client.post("/api/home/tasks", json=task_payload())).status_code == 401


async def test_create_and_get_task(client, admin_headers):
    response = await client.post(
        "/api/home/tasks",
        json=task_payload(related_item_sku="ITEM-1001"),
        headers=admin_headers,
    )

    assert response.status_code == 201
    task = response.json()
    assert task["status"] == "Pending"
    assert task["priority"] == "Medium"
    assert task["category"] == "General"
    assert task["is_completed"] is False

    fetched = await client.get(f"/api/home/tasks/{task['id']}", headers=admin_headers)
    assert fetched.json()["title"] == "Count shelf A"

    logs = (await client.get("/api/activitylogs/type/Task Created")).json()
    assert logs[0]["description"] == "Task 'Count shelf A' was created"
    assert logs[0]["item_sku"] == "ITEM-1001"
    assert logs[0]["user_name"] == "admin"


async def test_complete_keeps_first_completion_time(client, admin_headers):
    task = (await client.post("/api/home/tasks", json=task_payload(), headers=admin_headers)).json()

    first = await client.put(f"/api/home/tasks/{task['id']}/complete", headers=admin_headers)
    second = await client.put(f"/api/home/tasks/{task['id']}/complete", headers=admin_headers)

    assert first.status_code == 200
    assert first.json()["status"] == "Completed"
    assert first.json()["completed_at"] is not None
    assert first.json()["completion_date"] == first.json()["completed_at"]
    assert second.json()["completed_at"] == first.json()["completed_at"]


async def test_leaving_completed_clears_completion(client, admin_headers):
    task = (await client.post("/api/home/tasks", json=task_payload(), headers=admin_headers)).json()
    await client.put(f"/api/home/tasks/{task['id']}/complete", headers=admin_headers)

    kept = await client.put(
        f"/api/home/tasks/{task['id']}", json={"description": "recount"}, headers=admin_headers
    )
    reopened = await client.put(
        f"/api/home/tasks/{task['id']}", json={"status": "In Progress"}, headers=admin_headers
    )

    assert kept.json()["completed_at"] is not None
    assert reopened.json()["status"] == "In Progress"
    assert reopened.json()["completed_at"] is None


async def test_update_id_mismatch(client, admin_headers):
    task = (await client.post("/api/home/tasks", json=task_payload(), headers=admin_headers)).json()

    response = await client.put(
        f"/api/home/tasks/{task['id']}", json={"id": task["id"] + 1}, headers=admin_headers
    )

    assert response.status_code == 400


async def test_today_ordering(client, admin_headers):
    far = (datetime.now(timezone.utc) + timedelta(days=10)).isoformat()
    low = (await client.post(
        "/api/home/tasks", json=task_payload("low", priority="Low", due_date=far), headers=admin_headers
    )).json()
    high = (await client.post(
        "/api/home/tasks", json=task_payload("high", priority="High", due_date=far), headers=admin_headers
    )).json()
    done = (await client.post(
        "/api/home/tasks", json=task_payload("done", priority="Medium", due_date=far), headers=admin_headers
    )).json()
    await client.put(f"/api/home/tasks/{done['id']}/complete", headers=admin_headers)
    medium = (await client.post(
        "/api/home/tasks", json=task_payload("medium", priority="Medium", due_date=far), headers=admin_headers
    )).json()

    today = (await client.get("/api/home/tasks/today", headers=admin_headers)).json()

    assert [t["id"] for t in today] == [high["id"], medium["id"], low["id"], done["id"]]


async def test_list_and_delete(client, admin_headers):
    first = (await client.post("/api/home/tasks", json=task_payload("first"), headers=admin_headers)).json()
    second = (await client.post("/api/home/tasks", json=task_payload("second"), headers=admin_headers)).json()

    listed = (await client.get("/api/home/tasks", headers=admin_headers)).json()
    assert [t["id"] for t in listed] == [second["id"], first["id"]]

    response = await client.delete(f"/api/home/tasks/{first['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert (await client.get(f"/api/home/tasks/{first['id']}", headers=admin_headers)).status_code == 404

    deleted = (await client.get("/api/activitylogs/type/Task Deleted")).json()
    assert deleted[0]["description"] == "Task 'first' was deleted"
