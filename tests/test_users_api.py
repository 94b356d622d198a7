from api.features.auth.security import verify_password
from api.features.users.entities.user import User
from tests.conftest import PASSWORD, login


async def test_attendant_creates_client(attendant):
    response = await attendant.post(
        "/api/users/clients",
        json={"username": "  ana  ", "password": "abcdef", "name": "Ana"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["username"] == "ana"
    assert data["role"] == "client"
    assert "password" not in data


async def test_password_is_stored_hashed(attendant, db_session):
    response = await attendant.post(
        "/api/users/attendants",
        json={"username": "carla", "password": "abcdef", "name": "Carla"},
    )
    user = await db_session.get(User, response.json()["data"]["id"])

    assert user.password != "abcdef"
    assert verify_password("abcdef", user.password)


async def test_duplicate_username_is_rejected(attendant, client_id):
    response = await attendant.post(
        "/api/users/clients",
        json={"username": "joao", "password": "abcdef", "name": "Other Joao"},
    )
    assert response.status_code == 400


async def test_lists_are_split_by_role(attendant, client_id, attendant_id):
    clients = (await attendant.get("/api/users/clients")).json()["data"]
    attendants = (await attendant.get("/api/users/attendants")).json()["data"]

    assert [u["id"] for u in clients["items"]] == [client_id]
    assert [u["id"] for u in attendants["items"]] == [attendant_id]


async def test_all_users_is_open_to_clients(client_user, attendant_id, client_id):
    response = await client_user.get("/api/users/all")

    assert response.status_code == 200
    assert {u["id"] for u in response.json()["data"]["items"]} == {attendant_id, client_id}


async def test_clients_cannot_manage_users(client_user):
    response = await client_user.post(
        "/api/users/clients",
        json={"username": "ana", "password": "abcdef", "name": "Ana"},
    )
    assert response.status_code == 403

    response = await client_user.get("/api/users/attendants")
    assert response.status_code == 403


async def test_unknown_collection_is_not_found(attendant):
    response = await attendant.get("/api/users/admins")
    assert response.status_code == 404


async def test_update_client_changes_name(attendant, client_id):
    response = await attendant.patch(
        f"/api/users/clients/{client_id}", json={"name": "João Silva"}
    )

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "João Silva"


async def test_update_checks_role(attendant, client_id):
    response = await attendant.patch(
        f"/api/users/attendants/{client_id}", json={"name": "Nope"}
    )
    assert response.status_code == 404


async def test_attendant_cannot_delete_self(attendant, attendant_id):
    response = await attendant.delete(f"/api/users/attendants/{attendant_id}")
    assert response.status_code == 400


async def test_delete_client(attendant, client_id):
    response = await attendant.delete(f"/api/users/clients/{client_id}")
    assert response.status_code == 200

    response = await attendant.delete(f"/api/users/clients/{client_id}")
    assert response.status_code == 404


async def test_updated_password_is_used_for_login(attendant, client_id, make_client):
    response = await attendant.patch(
        f"/api/users/clients/{client_id}", json={"password": "new-secret"}
    )
    assert response.status_code == 200

    fresh = await make_client()
    assert (await login(fresh, "joao", "new-secret")).status_code == 200
    assert (await login(fresh, "joao", PASSWORD)).status_code == 401


async def test_update_rejects_null_required_fields(attendant, client_id):
    for field in ("username", "name", "password"):
        response = await attendant.patch(
            f"/api/users/clients/{client_id}", json={field: None}
        )
        assert response.status_code == 422, field
        assert "SQL" not in response.text


async def test_update_to_taken_username_is_rejected(attendant, client_id, attendant_id):
    response = await attendant.patch(
        f"/api/users/clients/{client_id}", json={"username": "maria"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Username 'maria' already exists"
