"""Order endpoints for the authenticated caller."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy import func, insert, select

from models.order import Order
from models.user import User
from storage import StoreError, get_store
from utils.request_validation import parse_json_request
from utils.security import auth_required

orders_bp = Blueprint("orders", __name__)


@orders_bp.errorhandler(StoreError)
def _handle_store_error(error: StoreError):
    return jsonify(error.to_dict()), HTTPStatus.BAD_REQUEST


@orders_bp.route("/orders", methods=["POST"])
@auth_required
def create_order():
    """Record an order for the caller."""

    payload = parse_json_request(request, allow_empty=True)
    statement = (
        insert(Order.__table__)
        .values(
            user_id=g.user_id,
            product=payload.get("product"),
            amount=payload.get("amount"),
        )
        .returning(*Order.__table__.c)
    )
    row = get_store().write(statement)

    current_app.logger.info("Order %s created for user %s", row.id, g.user_id)
    return jsonify(Order.serialize(row))


@orders_bp.route("/orders", methods=["GET"])
@auth_required
def list_orders():
    """Return the caller's orders joined with their owner's name."""

    statement = (
        select(Order.id, User.name, Order.product, Order.amount)
        .join(User, Order.user_id == User.id)
        .where(Order.user_id == g.user_id)
        .order_by(Order.id)
    )
    rows = get_store().fetch_all(statement)
    return jsonify(
        [
            {
                "id": row.id,
                "name": row.name,
                "product": row.product,
                "amount": row.amount,
            }
            for row in rows
        ]
    )


@orders_bp.route("/orders/total", methods=["GET"])
@auth_required
def orders_total():
    """Return the sum of the caller's order amounts (null without orders)."""

    total = get_store().scalar(
        select(func.sum(Order.amount)).where(Order.user_id == g.user_id)
    )
    return jsonify({"total_spent": total})
