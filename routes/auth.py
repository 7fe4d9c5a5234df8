"""Authentication blueprint providing the login endpoint."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import select

from models.user import User
from storage import StoreError, get_store
from utils.errors import CredentialError
from utils.request_validation import parse_json_request
from utils.security import issue_token, verify_password

auth_bp = Blueprint("auth", __name__)


@auth_bp.errorhandler(StoreError)
def _handle_store_error(error: StoreError):
    return jsonify(error.to_dict()), HTTPStatus.INTERNAL_SERVER_ERROR


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a signed token."""

    payload = parse_json_request(request, allow_empty=True)
    email = payload.get("email")
    password = payload.get("password")

    user = None
    # ``== None`` would compile to IS NULL and match users without an email.
    if email is not None:
        user = get_store().fetch_one(
            select(User.id, User.password).where(User.email == email)
        )
    if user is None:
        current_app.logger.info("Login rejected: unknown email")
        raise CredentialError("User not found")

    if not verify_password(password, user.password):
        current_app.logger.info("Login rejected: bad password for user %s", user.id)
        raise CredentialError("Invalid credentials")

    return jsonify({"token": issue_token(user.id)}), HTTPStatus.OK
