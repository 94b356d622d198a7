from tests.conftest import login


async def test_login_returns_user_without_password(anonymous, attendant_id):
    response = await login(anonymous, "maria")

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["id"] == attendant_id
    assert body["data"]["role"] == "attendant"
    assert "password" not in body["data"]


async def test_login_rejects_wrong_password(anonymous, attendant_id):
    response = await login(anonymous, "maria", "wrong-password")
    assert response.status_code == 401


async def test_login_rejects_unknown_user(anonymous):
    response = await login(anonymous, "nobody")
    assert response.status_code == 401


async def test_me_requires_session(anonymous):
    response = await anonymous.get("/api/auth/me")
    assert response.status_code == 401


async def test_me_returns_logged_in_user(client_user, client_id):
    response = await client_user.get("/api/auth/me")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == client_id


async def test_logout_ends_session(attendant):
    response = await attendant.post("/api/auth/logout")
    assert response.status_code == 200

    response = await attendant.get("/api/auth/me")
    assert response.status_code == 401


async def test_health(anonymous):
    response = await anonymous.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
