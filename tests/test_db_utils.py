from sqlalchemy.exc import IntegrityError

from infra.db_utils import unique_violation_field


class AsyncpgUniqueViolation(Exception):
    sqlstate = "23505"

    def __init__(self, constraint_name):
        super().__init__("duplicate key value violates unique constraint")
        self.constraint_name = constraint_name


class AdaptedIntegrityError(Exception):
    """Mimics SQLAlchemy's asyncpg adapter: sqlstate on the wrapper, details on the cause."""

    def __init__(self, cause):
        super().__init__(str(cause))
        self.sqlstate = cause.sqlstate
        self.__cause__ = cause


class PsycopgDiag:
    def __init__(self, constraint_name):
        self.constraint_name = constraint_name


class PsycopgUniqueViolation(Exception):
    pgcode = "23505"

    def __init__(self, constraint_name):
        super().__init__("duplicate key")
        self.diag = PsycopgDiag(constraint_name)


class ForeignKeyViolation(Exception):
    sqlstate = "23503"
    constraint_name = "conversations_client_id_fkey"


def wrap(orig):
    return IntegrityError("INSERT ...", {}, orig)


def test_asyncpg_protocol_constraint_maps_to_field():
    orig = AdaptedIntegrityError(AsyncpgUniqueViolation("conversations_protocol_unique"))
    assert unique_violation_field(wrap(orig)) == "protocol"


def test_psycopg_diag_constraint_maps_to_field():
    orig = PsycopgUniqueViolation("users_username_unique")
    assert unique_violation_field(wrap(orig)) == "username"


def test_unknown_constraint_name_is_returned_verbatim():
    orig = AdaptedIntegrityError(AsyncpgUniqueViolation("some_other_key"))
    assert unique_violation_field(wrap(orig)) == "some_other_key"


def test_sqlite_message_is_parsed():
    orig = Exception("UNIQUE constraint failed: conversations.protocol")
    assert unique_violation_field(wrap(orig)) == "protocol"


def test_non_unique_integrity_errors_are_not_violations():
    assert unique_violation_field(wrap(ForeignKeyViolation())) is None
    assert unique_violation_field(wrap(Exception("NOT NULL constraint failed: users.name"))) is None
