"""User registration and listing endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import insert, select

from models.user import User
from storage import StoreError, get_store
from utils.request_validation import parse_json_request
from utils.security import hash_password

users_bp = Blueprint("users", __name__)


@users_bp.errorhandler(StoreError)
def _handle_store_error(error: StoreError):
    return jsonify(error.to_dict()), HTTPStatus.INTERNAL_SERVER_ERROR


def _include_password() -> bool:
    return bool(current_app.config.get("USERS_INCLUDE_PASSWORD_HASH", True))


@users_bp.route("/users", methods=["GET"])
def list_users():
    """Return every registered user."""

    rows = get_store().fetch_all(select(*User.__table__.c).order_by(User.id))
    include_password = _include_password()
    return jsonify([User.serialize(row, include_password) for row in rows])


@users_bp.route("/users", methods=["POST"])
def create_user():
    """Register a user; the password is stored hashed."""

    payload = parse_json_request(request, allow_empty=True)
    statement = (
        insert(User.__table__)
        .values(
            name=payload.get("name"),
            email=payload.get("email"),
            password=hash_password(payload.get("password")),
        )
        .returning(*User.__table__.c)
    )
    row = get_store().write(statement)

    current_app.logger.info("Registered user %s", row.id)
    return jsonify(User.serialize(row, _include_password())), HTTPStatus.CREATED
