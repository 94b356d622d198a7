from api.features.channels.entities.channel import Channel, ChannelType


async def test_lists_channels_for_any_user(client_user, channel_id):
    response = await client_user.get("/api/channels/")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 1
    assert data["items"][0]["id"] == channel_id
    assert data["items"][0]["type"] == "web"


async def test_get_channel(client_user, channel_id):
    response = await client_user.get(f"/api/channels/{channel_id}")
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "web"

    response = await client_user.get("/api/channels/missing")
    assert response.status_code == 404


async def test_attendant_creates_channel(attendant):
    response = await attendant.post(
        "/api/channels/", json={"name": "whatsapp", "type": "whatsapp"}
    )

    assert response.status_code == 200
    assert response.json()["data"]["is_active"] is True


async def test_channel_names_are_unique(attendant, channel_id):
    response = await attendant.post("/api/channels/", json={"name": "web"})
    assert response.status_code == 400


async def test_clients_cannot_create_channels(client_user):
    response = await client_user.post("/api/channels/", json={"name": "telegram"})
    assert response.status_code == 403


async def test_channels_require_session(anonymous):
    response = await anonymous.get("/api/channels/")
    assert response.status_code == 401


async def test_missing_channel_reports_its_id(client_user):
    response = await client_user.get("/api/channels/nope")

    assert response.status_code == 404
    assert response.json()["detail"] == "Channel with ID 'nope' not found"


async def test_listing_is_not_truncated(client_user, db_session):
    db_session.add_all(
        Channel(name=f"channel-{i}", type=ChannelType.WEB, is_active=True) for i in range(150)
    )
    await db_session.commit()

    data = (await client_user.get("/api/channels/")).json()["data"]

    assert data["total"] == 150
    assert len(data["items"]) == 150
