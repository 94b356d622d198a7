import random
import re

import pytest

from api.features.conversations.protocol import (
    MAX_ATTEMPTS,
    PROTOCOL_ALPHABET,
    Created,
    Exhausted,
    Failed,
    ProtocolGenerator,
    StoreFailure,
    UniqueProtocolPolicy,
    UniquenessViolation,
    generate_protocol,
)

PROTOCOL_RE = re.compile(r"^[A-Z0-9]{10}$")


class RecordingStore:
    """Insert stub that answers from a script and records every protocol it sees."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    async def insert(self, protocol):
        self.calls.append(protocol)
        index = min(len(self.calls), len(self.responses)) - 1
        response = self.responses[index]
        if response == "ok":
            return {"id": len(self.calls), "protocol": protocol}
        if isinstance(response, Exception):
            raise response
        return response


def make_policy(seed=7, max_attempts=MAX_ATTEMPTS):
    return UniqueProtocolPolicy(ProtocolGenerator(random.Random(seed)), max_attempts)


def test_generated_protocols_have_fixed_shape():
    generator = ProtocolGenerator(random.Random(1))
    for _ in range(500):
        assert PROTOCOL_RE.match(generator.generate())


def test_module_level_generator_matches_shape():
    protocol = generate_protocol()
    assert len(protocol) == 10
    assert set(protocol) <= set(PROTOCOL_ALPHABET)


def test_consecutive_protocols_differ():
    generator = ProtocolGenerator()
    samples = [generator() for _ in range(1000)]
    assert all(a != b for a, b in zip(samples, samples[1:]))


def test_seeded_generators_are_reproducible():
    first = ProtocolGenerator(random.Random(42))
    second = ProtocolGenerator(random.Random(42))
    assert [first.generate() for _ in range(5)] == [second.generate() for _ in range(5)]


def test_generator_rejects_invalid_configuration():
    with pytest.raises(ValueError):
        ProtocolGenerator(length=0)
    with pytest.raises(ValueError):
        ProtocolGenerator(alphabet="")
    with pytest.raises(ValueError):
        UniqueProtocolPolicy(ProtocolGenerator(), max_attempts=0)


async def test_immediate_success_uses_one_call():
    store = RecordingStore("ok")

    outcome = await make_policy().run(store.insert)

    assert isinstance(outcome, Created)
    assert len(store.calls) == 1
    assert outcome.attempts == 1
    assert outcome.record["protocol"] == store.calls[0] == outcome.protocol


async def test_retries_until_free_protocol_found():
    collision = UniquenessViolation(field="protocol")
    store = RecordingStore(collision, collision, collision, "ok")

    outcome = await make_policy().run(store.insert)

    assert isinstance(outcome, Created)
    assert len(store.calls) == 4
    assert outcome.protocol == store.calls[3]
    assert outcome.record["protocol"] == store.calls[3]


async def test_exhausts_after_max_attempts():
    store = RecordingStore(UniquenessViolation(field="protocol"))

    outcome = await make_policy().run(store.insert)

    assert isinstance(outcome, Exhausted)
    assert len(store.calls) == 10
    assert outcome.attempts == 10
    assert outcome.collisions == tuple(store.calls)
    assert outcome.last_collision.details == {"protocol": store.calls[-1]}


async def test_custom_attempt_bound_is_honoured():
    store = RecordingStore(UniquenessViolation(field="protocol"))

    outcome = await make_policy(max_attempts=3).run(store.insert)

    assert isinstance(outcome, Exhausted)
    assert len(store.calls) == 3


async def test_store_failure_is_not_retried():
    error = ConnectionError("database went away")
    store = RecordingStore(StoreFailure(cause=error), "ok")

    outcome = await make_policy().run(store.insert)

    assert isinstance(outcome, Failed)
    assert outcome.cause is error
    assert len(store.calls) == 1


async def test_raised_store_error_is_not_retried():
    error = RuntimeError("boom")
    store = RecordingStore(error, "ok")

    outcome = await make_policy().run(store.insert)

    assert isinstance(outcome, Failed)
    assert outcome.cause is error
    assert len(store.calls) == 1


async def test_violation_on_other_field_is_fatal():
    cause = ValueError("duplicate client reference")
    store = RecordingStore(UniquenessViolation(field="client_id", cause=cause), "ok")

    outcome = await make_policy().run(store.insert)

    assert isinstance(outcome, Failed)
    assert outcome.cause is cause
    assert len(store.calls) == 1


async def test_each_attempt_draws_a_new_protocol():
    store = RecordingStore(UniquenessViolation(field="protocol"), "ok")

    await make_policy().run(store.insert)

    assert len(store.calls) == 2
    assert store.calls[0] != store.calls[1]
