"""Shared fixtures: a SQLite database per test, a fake object store and
HTTP clients bound to the real application container.
"""
from typing import Dict, Tuple

import pytest
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event

from api.features.auth.security import hash_password
from api.features.channels.entities.channel import Channel, ChannelType
from api.features.users.entities.user import User, UserRole
from api.main import app
from api.shared.entities.registry import BaseEntity
from infra.resources import DatabaseResource

PASSWORD = "secret123"


def enable_sqlite_savepoints(engine) -> None:
    """Let pysqlite honour SAVEPOINT by emitting BEGIN ourselves."""

    @event.listens_for(engine.sync_engine, "connect")
    def _connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")


class FakeObjectStore:
    """In-memory stand-in for MinIOResource."""

    def __init__(self):
        self.bucket_name = "test-bucket"
        self.objects: Dict[str, Tuple[bytes, str]] = {}

    async def put_object_bytes(
        self, object_name: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> None:
        self.objects[object_name] = (data, content_type)

    async def get_object_bytes(self, object_name: str) -> bytes:
        return self.objects[object_name][0]

    async def object_exists(self, object_name: str) -> bool:
        return object_name in self.objects


@pytest.fixture
async def database(tmp_path):
    db = DatabaseResource(f"sqlite+aiosqlite:///{tmp_path / 'chatdesk.db'}")
    await db.init()
    enable_sqlite_savepoints(db.engine)
    async with db.engine.begin() as conn:
        await conn.run_sync(BaseEntity.metadata.create_all)
    yield db
    await db.shutdown()


@pytest.fixture
async def db_session(database):
    session = database.get_session()
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def container(database, object_store):
    container = app.container
    container.infrastructure.database.override(providers.Object(database))
    container.infrastructure.minio_client.override(providers.Object(object_store))
    yield container
    container.infrastructure.database.reset_override()
    container.infrastructure.minio_client.reset_override()


async def create_user(database, username: str, role: UserRole, name: str = None) -> str:
    session = database.get_session()
    try:
        user = User(
            username=username,
            password=hash_password(PASSWORD),
            name=name or username.title(),
            role=role,
        )
        session.add(user)
        await session.commit()
        return user.id
    finally:
        await session.close()


async def create_channel(
    database, name: str = "web", channel_type: ChannelType = ChannelType.WEB, active: bool = True
) -> str:
    session = database.get_session()
    try:
        channel = Channel(name=name, description=f"{name} channel", type=channel_type, is_active=active)
        session.add(channel)
        await session.commit()
        return channel.id
    finally:
        await session.close()


async def login(client: AsyncClient, username: str, password: str = PASSWORD):
    return await client.post(
        "/api/auth/login", json={"username": username, "password": password}
    )


@pytest.fixture
async def make_client(container):
    """Factory for independent HTTP clients, each with its own cookie jar."""
    clients = []

    async def _make(username: str = None) -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")
        clients.append(client)
        if username is not None:
            response = await login(client, username)
            assert response.status_code == 200, response.text
        return client

    yield _make
    for client in clients:
        await client.aclose()


@pytest.fixture
async def attendant_id(database):
    return await create_user(database, "maria", UserRole.ATTENDANT, "Maria Attendant")


@pytest.fixture
async def client_id(database):
    return await create_user(database, "joao", UserRole.CLIENT, "Joao Client")


@pytest.fixture
async def channel_id(database):
    return await create_channel(database)


@pytest.fixture
async def anonymous(make_client):
    return await make_client()


@pytest.fixture
async def attendant(make_client, attendant_id):
    return await make_client("maria")


@pytest.fixture
async def client_user(make_client, client_id):
    return await make_client("joao")
