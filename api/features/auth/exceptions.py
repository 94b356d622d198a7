"""Exceptions for the Auth feature."""
from api.shared.exceptions import AuthenticationError


class InvalidCredentialsError(AuthenticationError):
    """Raised when a username/password pair does not match."""

    def __init__(self):
        super().__init__("Invalid credentials")
