"""Shared DB utilities: classification of driver integrity errors."""
import re
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION_SQLSTATE = "23505"

# Named unique constraints and the column each one guards.
UNIQUE_CONSTRAINT_FIELDS: Dict[str, str] = {
    "conversations_protocol_unique": "protocol",
    "users_username_unique": "username",
    "channels_name_unique": "name",
}

_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: (?P<columns>[\w.,\s]+)")


def _sqlstate(orig: BaseException) -> Optional[str]:
    # asyncpg exposes `sqlstate`, psycopg exposes `pgcode`/`sqlstate`
    for attr in ("sqlstate", "pgcode"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)
    cause = getattr(orig, "__cause__", None)
    if cause is not None and cause is not orig:
        return getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    return None


def _constraint_name(orig: BaseException) -> Optional[str]:
    name = getattr(orig, "constraint_name", None)
    if name:
        return name
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name
    cause = getattr(orig, "__cause__", None)
    if cause is not None and cause is not orig:
        return getattr(cause, "constraint_name", None)
    return None


def unique_violation_field(error: IntegrityError) -> Optional[str]:
    """Return the column a unique violation refers to, or None.

    PostgreSQL drivers report SQLSTATE 23505 together with the constraint name,
    which is mapped back to its column. SQLite reports the offending
    ``table.column`` pair in the error message.
    """
    orig = error.orig if error.orig is not None else error

    if _sqlstate(orig) == UNIQUE_VIOLATION_SQLSTATE:
        name = _constraint_name(orig)
        if name is None:
            return None
        return UNIQUE_CONSTRAINT_FIELDS.get(name, name)

    match = _SQLITE_UNIQUE_RE.search(str(orig))
    if match:
        first = match.group("columns").split(",")[0].strip()
        return first.rsplit(".", 1)[-1]

    return None
