import pytest

from api.features.conversations.dtos import CreateConversationRequest
from api.features.conversations.exceptions import ProtocolExhaustedError
from api.features.conversations.repository import ConversationRepository
from api.features.conversations.protocol import StoreFailure, UniquenessViolation
from api.features.conversations.service import ConversationService
from api.features.users.entities.user import UserRole
from tests.conftest import create_channel, create_user


class ScriptedGenerator:
    """Yields the given protocols in order, repeating the last one."""

    def __init__(self, *protocols):
        self.protocols = list(protocols)
        self.calls = 0

    def generate(self):
        protocol = self.protocols[min(self.calls, len(self.protocols) - 1)]
        self.calls += 1
        return protocol


@pytest.fixture
async def participants(database):
    return {
        "channel_id": await create_channel(database),
        "client_id": await create_user(database, "client1", UserRole.CLIENT),
        "attendant_id": await create_user(database, "attendant1", UserRole.ATTENDANT),
    }


async def test_duplicate_protocol_reports_protocol_violation(db_session, participants):
    repository = ConversationRepository(db_session)

    first = await repository.insert_with_protocol(dict(participants), "ABCDE12345")
    second = await repository.insert_with_protocol(dict(participants), "ABCDE12345")

    assert first.protocol == "ABCDE12345"
    assert isinstance(second, UniquenessViolation)
    assert second.field == "protocol"


async def test_session_stays_usable_after_collision(db_session, participants):
    repository = ConversationRepository(db_session)
    await repository.insert_with_protocol(dict(participants), "ABCDE12345")
    await repository.insert_with_protocol(dict(participants), "ABCDE12345")

    third = await repository.insert_with_protocol(dict(participants), "ZZZZZ99999")
    await db_session.commit()

    assert third.protocol == "ZZZZZ99999"
    assert len(await repository.list_all()) == 2


async def test_missing_reference_is_a_store_failure(db_session, participants):
    repository = ConversationRepository(db_session)
    values = dict(participants, client_id=None)

    result = await repository.insert_with_protocol(values, "ABCDE12345")

    assert isinstance(result, StoreFailure)


async def test_service_recovers_from_collision(db_session, participants):
    generator = ScriptedGenerator("TAKEN00000", "TAKEN00000", "FREE000000")
    service = ConversationService(protocol_generator=generator)
    request = CreateConversationRequest(**participants)

    first = await service.create_conversation(request, db_session=db_session)
    second = await service.create_conversation(request, db_session=db_session)

    assert first.protocol == "TAKEN00000"
    assert second.protocol == "FREE000000"
    assert generator.calls == 3


async def test_service_gives_up_after_max_attempts(db_session, participants):
    generator = ScriptedGenerator("TAKEN00000")
    service = ConversationService(protocol_generator=generator)
    request = CreateConversationRequest(**participants)
    await service.create_conversation(request, db_session=db_session)

    with pytest.raises(ProtocolExhaustedError) as excinfo:
        await service.create_conversation(request, db_session=db_session)

    assert excinfo.value.attempts == 10
    assert generator.calls == 11
    conversations = await ConversationRepository(db_session).list_all()
    assert [c.protocol for c in conversations] == ["TAKEN00000"]
