def worker_payload(username="jdoe", **overrides):
    payload = {
        "username": username,
        "password": "secret123",
        "email": f"{username}@warehouse.com",
        "full_name": "Jane Doe",
    }
    payload.update(overrides)
    return payload


async def test_workers_require_admin(client, admin_headers):
    assert (await client.get("/api/workers")).status_code == 401

    await client.post("/api/workers", json=worker_payload(), headers=admin_headers)
    employee = await client.post(
        "/api/auth/login", json={"username": "jdoe", "password": "secret123"}
    )
    client.cookies.clear()
    headers = {"Authorization": f"Bearer {employee.json()['access_token']}"}

    assert (await client.get("/api/workers", headers=headers)).status_code == 403


async def test_create_worker_defaults(client, admin_headers):
    response = await client.post("/api/workers", json=worker_payload(), headers=admin_headers)

    assert response.status_code == 201
    worker = response.json()
    assert worker["role"] == "Employee"
    assert worker["department"] == "General"
    assert worker["is_active"] is True
    assert "password_hash" not in worker


async def test_duplicate_username_or_email_conflicts(client, admin_headers):
    await client.post("/api/workers", json=worker_payload(), headers=admin_headers)

    same_username = await client.post(
        "/api/workers", json=worker_payload(email="other@warehouse.com"), headers=admin_headers
    )
    same_email = await client.post(
        "/api/workers", json=worker_payload("other", email="jdoe@warehouse.com"), headers=admin_headers
    )

    assert same_username.status_code == 409
    assert same_email.status_code == 409


async def test_update_email_conflict_and_password_change(client, admin_headers):
    first = (await client.post("/api/workers", json=worker_payload(), headers=admin_headers)).json()
    await client.post("/api/workers", json=worker_payload("msmith"), headers=admin_headers)

    conflict = await client.put(
        f"/api/workers/{first['id']}", json={"email": "msmith@warehouse.com"}, headers=admin_headers
    )
    assert conflict.status_code == 409

    updated = await client.put(
        f"/api/workers/{first['id']}",
        json={"password": "newsecret", "role": "Manager"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["role"] == "Manager"

    old = await client.post("/api/auth/login", json={"username": "jdoe", "password": "secret123"})
    new = await client.post("/api/auth/login", json={"username": "jdoe", "password": "newsecret"})
    assert old.status_code == 401
    assert new.status_code == 200


async def test_last_admin_cannot_be_deleted(client, admin_headers):
    me = (await client.get("/api/auth/me", headers=admin_headers)).json()

    response = await client.delete(f"/api/workers/{me['id']}", headers=admin_headers)

    assert response.status_code == 409
    assert (await client.get(f"/api/workers/{me['id']}", headers=admin_headers)).status_code == 200


async def test_non_last_admin_can_be_deleted(client, admin_headers):
    second = (await client.post(
        "/api/workers", json=worker_payload("boss", role="Admin"), headers=admin_headers
    )).json()

    response = await client.delete(f"/api/workers/{second['id']}", headers=admin_headers)

    assert response.status_code == 204
    assert (await client.get(f"/api/workers/{second['id']}", headers=admin_headers)).status_code == 404


async def test_unknown_worker(client, admin_headers):
    assert (await client.get("/api/workers/9999", headers=admin_headers)).status_code == 404
    assert (await client.delete("/api/workers/9999", headers=admin_headers)).status_code == 404


async def test_last_admin_cannot_be_demoted_or_deactivated(client, admin_headers):
    me = (await client.get("/api/auth/me", headers=admin_headers)).json()

    demoted = await client.put(
        f"/api/workers/{me['id']}", json={"role": "Employee"}, headers=admin_headers
    )
    deactivated = await client.put(
        f"/api/workers/{me['id']}", json={"is_active": False}, headers=admin_headers
    )

    assert demoted.status_code == 409
    assert deactivated.status_code == 409
    worker = (await client.get(f"/api/workers/{me['id']}", headers=admin_headers)).json()
    assert worker["role"] == "Admin"
    assert worker["is_active"] is True


async def test_admin_can_be_demoted_while_another_is_active(client, admin_headers):
    second = (await client.post(
        "/api/workers", json=worker_payload("boss", role="Admin"), headers=admin_headers
    )).json()

    response = await client.put(
        f"/api/workers/{second['id']}", json={"role": "Manager"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["role"] == "Manager"
