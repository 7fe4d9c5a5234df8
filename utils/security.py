"""Password hashing, token issuing and the token-checking middleware."""

from __future__ import annotations

from functools import wraps

import jwt as pyjwt
from flask import current_app, g, has_app_context, jsonify, request
from flask_jwt_extended import (
    JWTManager,
    create_access_token,
    decode_token,
    get_jwt,
    jwt_required,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from werkzeug.security import check_password_hash, generate_password_hash

from .errors import InvalidToken, MissingToken, PasswordHashError

DEFAULT_HASH_METHOD = "scrypt"


def _hash_method() -> str:
    if has_app_context():
        return current_app.config.get("PASSWORD_HASH_METHOD") or DEFAULT_HASH_METHOD
    return DEFAULT_HASH_METHOD


def hash_password(plaintext: str) -> str:
    """Return a salted one-way hash of ``plaintext``."""

    if not isinstance(plaintext, str):
        raise PasswordHashError("Password must be a string.")
    try:
        return generate_password_hash(plaintext, method=_hash_method())
    except (TypeError, ValueError) as exc:
        raise PasswordHashError(str(exc)) from exc


def verify_password(plaintext: str, hashed: str | None) -> bool:
    """Check ``plaintext`` against a stored hash.

    Mismatches return False. An unknown hash method raises PasswordHashError.
    """

    if not hashed or not isinstance(plaintext, str):
        return False
    try:
        return check_password_hash(hashed, plaintext)
    except ValueError as exc:
        raise PasswordHashError(str(exc)) from exc


def issue_token(user_id: int) -> str:
    """Sign ``{"id": user_id}``; lifetime comes from JWT_ACCESS_TOKEN_EXPIRES."""

    return create_access_token(identity=str(user_id), additional_claims={"id": user_id})


def user_id_from_claims(claims: dict) -> int:
    """Read the user id from decoded token claims."""

    try:
        return int(claims["id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidToken() from exc


def verify_token(token: str | None) -> int:
    """Return the user id carried by ``token``."""

    if not token:
        raise MissingToken()
    try:
        claims = decode_token(token)
    except (pyjwt.PyJWTError, JWTExtendedException) as exc:
        raise InvalidToken() from exc
    return user_id_from_claims(claims)


def auth_required(view):
    """Require a valid token and expose the caller's id as ``g.user_id``."""

    @wraps(view)
    @jwt_required()
    def wrapper(*args, **kwargs):
        g.user_id = user_id_from_claims(get_jwt())
        return view(*args, **kwargs)

    return wrapper


def register_token_handlers(jwt: JWTManager) -> None:
    """Map flask-jwt-extended failures onto the API's auth error bodies."""

    def _invalid(*_args):
        error = InvalidToken()
        return jsonify(error.to_dict()), error.status_code

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        # A header that is present but not parseable counts as a bad token.
        header_name = current_app.config.get("JWT_HEADER_NAME", "Authorization")
        if request.headers.get(header_name, "").strip():
            return _invalid()
        error = MissingToken()
        return jsonify(error.to_dict()), error.status_code

    jwt.invalid_token_loader(_invalid)
    jwt.expired_token_loader(_invalid)
    jwt.token_verification_failed_loader(_invalid)
