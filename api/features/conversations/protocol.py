"""Conversation protocol codes.

A protocol is a short reference code shown to attendants and clients. Codes
are drawn at random and only made unique by the store's uniqueness
constraint: :class:`UniqueProtocolPolicy` generates a code, asks the store to
insert the record under it and draws again when the store reports that the
code is already taken, up to a fixed number of attempts.
"""
import random
import string
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Optional, Tuple, TypeVar, Union

import structlog

from api.features.conversations.exceptions import ProtocolCollisionError

logger = structlog.get_logger("chatdesk.conversations.protocol")

PROTOCOL_ALPHABET = string.ascii_uppercase + string.digits
PROTOCOL_LENGTH = 10
MAX_ATTEMPTS = 10
PROTOCOL_FIELD = "protocol"

R = TypeVar("R")


class ProtocolGenerator:
    """Draws protocol candidates from an injectable random source.

    Not cryptographically secure; a protocol is a display code, not a token.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        length: int = PROTOCOL_LENGTH,
        alphabet: str = PROTOCOL_ALPHABET,
    ):
        if length < 1:
            raise ValueError("Protocol length must be positive")
        if not alphabet:
            raise ValueError("Protocol alphabet cannot be empty")
        self.rng = rng or random.Random()
        self.length = length
        self.alphabet = alphabet

    def generate(self) -> str:
        return "".join(self.rng.choice(self.alphabet) for _ in range(self.length))

    __call__ = generate


_default_generator = ProtocolGenerator()


def generate_protocol(rng: Optional[random.Random] = None) -> str:
    """Generate one candidate protocol, from `rng` when given."""
    if rng is None:
        return _default_generator.generate()
    return ProtocolGenerator(rng).generate()


# Store results -----------------------------------------------------------


@dataclass(frozen=True)
class UniquenessViolation:
    """The store rejected the insert because `field` already holds the value."""

    field: str
    cause: Optional[BaseException] = None


@dataclass(frozen=True)
class StoreFailure:
    """Any other store error; never retried."""

    cause: BaseException


InsertFn = Callable[[str], Awaitable[Any]]


# Terminal outcomes -------------------------------------------------------


@dataclass(frozen=True)
class Created(Generic[R]):
    record: R
    protocol: str
    attempts: int


@dataclass(frozen=True)
class Exhausted:
    attempts: int
    collisions: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def last_collision(self) -> Optional[ProtocolCollisionError]:
        if not self.collisions:
            return None
        return ProtocolCollisionError(self.collisions[-1])


@dataclass(frozen=True)
class Failed:
    cause: BaseException
    attempts: int


Outcome = Union[Created[Any], Exhausted, Failed]


class UniqueProtocolPolicy:
    """Bounded generate-and-insert loop.

    Each attempt draws a fresh protocol and awaits ``insert(protocol)``. The
    insert callable returns the stored record, a :class:`UniquenessViolation`
    or a :class:`StoreFailure`; exceptions it raises are treated as store
    failures. Only a violation on the protocol field is retried.
    """

    def __init__(
        self,
        generator: ProtocolGenerator,
        max_attempts: int = MAX_ATTEMPTS,
        protocol_field: str = PROTOCOL_FIELD,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.generator = generator
        self.max_attempts = max_attempts
        self.protocol_field = protocol_field

    async def run(self, insert: InsertFn) -> Outcome:
        collisions = []
        attempt = 0
        while attempt < self.max_attempts:
            protocol = self.generator.generate()
            attempt += 1
            try:
                result = await insert(protocol)
            except Exception as e:
                logger.warning(
                    "protocol.insert.failed", attempt=attempt, error=repr(e)
                )
                return Failed(cause=e, attempts=attempt)

            if isinstance(result, UniquenessViolation):
                if result.field != self.protocol_field:
                    cause = result.cause or ValueError(
                        f"Duplicate value for unique field '{result.field}'"
                    )
                    return Failed(cause=cause, attempts=attempt)
                collisions.append(protocol)
                logger.debug("protocol.collision", attempt=attempt, protocol=protocol)
                continue

            if isinstance(result, StoreFailure):
                logger.warning(
                    "protocol.insert.failed", attempt=attempt, error=repr(result.cause)
                )
                return Failed(cause=result.cause, attempts=attempt)

            return Created(record=result, protocol=protocol, attempts=attempt)

        logger.error(
            "protocol.exhausted", attempts=attempt, collisions=len(collisions)
        )
        return Exhausted(attempts=attempt, collisions=tuple(collisions))
