PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


async def test_upload_and_fetch_avatar(client_user, anonymous, object_store):
    response = await client_user.post(
        "/api/upload/avatar", files={"avatar": ("me.png", PNG, "image/png")}
    )

    assert response.status_code == 200
    url = response.json()["data"]["avatar_url"]
    assert url.startswith("/uploads/avatars/avatar-")
    assert url.endswith(".png")
    assert len(object_store.objects) == 1

    fetched = await anonymous.get(url)
    assert fetched.status_code == 200
    assert fetched.content == PNG
    assert fetched.headers["content-type"] == "image/png"


async def test_rejects_non_images(client_user, object_store):
    response = await client_user.post(
        "/api/upload/avatar", files={"avatar": ("notes.txt", b"hello", "text/plain")}
    )

    assert response.status_code == 400
    assert object_store.objects == {}


async def test_rejects_empty_files(client_user):
    response = await client_user.post(
        "/api/upload/avatar", files={"avatar": ("me.png", b"", "image/png")}
    )
    assert response.status_code == 400


async def test_rejects_oversized_files(client_user):
    big = PNG + b"\x00" * (5 * 1024 * 1024)
    response = await client_user.post(
        "/api/upload/avatar", files={"avatar": ("big.png", big, "image/png")}
    )
    assert response.status_code == 413


async def test_upload_requires_session(anonymous):
    response = await anonymous.post(
        "/api/upload/avatar", files={"avatar": ("me.png", PNG, "image/png")}
    )
    assert response.status_code == 401


async def test_missing_avatar_is_not_found(anonymous):
    response = await anonymous.get("/uploads/avatars/avatar-0-0.png")
    assert response.status_code == 404
