from app.config import settings
from app.core.security import verify_session_token


async def test_login_returns_token_and_sets_cookie(client, admin_headers):
    response = await client.post(
        "/api/auth/login",
        json={"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == 24 * 60 * 60
    assert body["worker"]["role"] == "Admin"
    assert settings.SESSION_COOKIE_NAME in response.cookies

    claims = verify_session_token(body["access_token"])
    assert claims["username"] == settings.ADMIN_USERNAME
    assert claims["role"] == "Admin"
    assert claims["department"] == "Administration"
    assert claims["sub"] == str(body["worker"]["id"])


async def test_remember_me_extends_session(client, admin_headers):
    response = await client.post(
        "/api/auth/login",
        json={
            "username": settings.ADMIN_USERNAME,
            "password": settings.ADMIN_PASSWORD,
            "remember_me": True,
        },
    )

    assert response.json()["expires_in"] == 30 * 24 * 60 * 60


async def test_bad_credentials(client, admin_headers):
    wrong_password = await client.post(
        "/api/auth/login", json={"username": settings.ADMIN_USERNAME, "password": "nope"}
    )
    unknown = await client.post("/api/auth/login", json={"username": "ghost", "password": "nope"})

    assert wrong_password.status_code == 401
    assert unknown.status_code == 401


async def test_inactive_worker_cannot_login(client, admin_headers):
    created = (await client.post(
        "/api/workers",
        json={
            "username": "temp",
            "password": "secret123",
            "email": "temp@warehouse.com",
            "full_name": "Temp Worker",
        },
        headers=admin_headers,
    )).json()
    await client.put(f"/api/workers/{created['id']}", json={"is_active": False}, headers=admin_headers)

    response = await client.post("/api/auth/login", json={"username": "temp", "password": "secret123"})

    assert response.status_code == 401


async def test_me_accepts_cookie(client, admin_headers):
    await client.post(
        "/api/auth/login",
        json={"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD},
    )

    response = await client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.json()["username"] == settings.ADMIN_USERNAME
    assert response.json()["last_login"] is not None


async def test_invalid_token_rejected(client):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


async def test_login_and_logout_are_logged(client, admin_headers):
    await client.post("/api/auth/logout", headers=admin_headers)

    logins = (await client.get("/api/activitylogs/type/Login")).json()
    logouts = (await client.get("/api/activitylogs/type/Logout")).json()

    assert logins[0]["user_name"] == settings.ADMIN_USERNAME
    assert logouts[0]["description"] == f"{settings.ADMIN_USERNAME} logged out"
