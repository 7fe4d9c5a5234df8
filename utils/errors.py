"""Error kinds raised by the persistence and authentication layers."""

from __future__ import annotations

from http import HTTPStatus


class ApiError(Exception):
    """Base class for errors that translate directly into a JSON response."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    payload_key: str = "error"
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {self.payload_key: self.message}


class StoreError(ApiError):
    """A statement failed: connectivity, constraint violation or bad SQL.

    The status code is chosen by the blueprint that handles it.
    """

    default_message = "Database error"


class PasswordHashError(ApiError):
    """The hashing library rejected its input."""

    default_message = "Unable to hash password"


class AuthError(ApiError):
    payload_key = "message"


class MissingToken(AuthError):
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Access Denied"


class InvalidToken(AuthError):
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Invalid Token"


class CredentialError(ApiError):
    """Login failed because the user is unknown or the password is wrong."""

    status_code = HTTPStatus.BAD_REQUEST
    payload_key = "message"
    default_message = "Invalid credentials"
