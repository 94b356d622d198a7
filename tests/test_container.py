import subprocess
import sys
from pathlib import Path

import pytest
from sqlalchemy.exc import IntegrityError

from api.features.auth.controller import AuthController
from api.features.channels.controller import ChannelController
from api.features.conversations.controller import ConversationController
from api.features.users.controller import UserController
from api.shared.exceptions import DatabaseError
from di.container import InfrastructureContainer

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.mark.parametrize("module", ["di.container", "api.features.auth.controller", "api.main"])
def test_module_imports_in_fresh_interpreter(module):
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr


def test_controllers_resolve(container):
    assert isinstance(container.controllers.auth_controller(), AuthController)
    assert isinstance(container.controllers.user_controller(), UserController)
    assert isinstance(container.controllers.channel_controller(), ChannelController)
    assert isinstance(
        container.controllers.conversation_controller(), ConversationController
    )


def test_infrastructure_exposes_only_resources():
    assert set(InfrastructureContainer.providers) == {"database", "minio_client"}


def test_database_error_hides_statement():
    cause = IntegrityError(
        "UPDATE users SET name=? WHERE users.id = ?", (None, "abc"), Exception("NOT NULL")
    )

    error = DatabaseError.from_cause("updating user", cause)

    assert error.message == "IntegrityError while updating user"
    assert "UPDATE" not in error.message
    assert error.error_code == "DATABASE_ERROR"
