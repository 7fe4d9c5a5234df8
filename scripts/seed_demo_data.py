"""Seed demo users and orders for local development.

Run from the project root with ``python -m scripts.seed_demo_data``.
"""

from __future__ import annotations

import json
from decimal import Decimal

from flask import Flask

from app import create_app
from models import db
from models.order import Order
from models.user import User
from utils.security import hash_password

DEMO_USERS = [
    {
        "name": "Ada Buyer",
        "email": "ada@example.com",
        "password": "AdaPass123",
        "orders": [("Keyboard", Decimal("49.99")), ("Mouse", Decimal("19.50"))],
    },
    {
        "name": "Ben Shopper",
        "email": "ben@example.com",
        "password": "BenPass123",
        "orders": [("Monitor", Decimal("189.00"))],
    },
]


def get_or_create_user(name: str, email: str, password: str) -> User:
    """Create the user or reset the password of an existing one."""

    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(name=name, email=email)
        db.session.add(user)
    user.password = hash_password(password)
    return user


def seed(app: Flask) -> dict[str, int]:
    """Insert the demo records and return ``{email: user id}``."""

    created: dict[str, int] = {}
    with app.app_context():
        db.create_all()

        for data in DEMO_USERS:
            user = get_or_create_user(data["name"], data["email"], data["password"])
            db.session.flush()

            for product, amount in data["orders"]:
                existing = Order.query.filter_by(user_id=user.id, product=product).first()
                if existing is None:
                    db.session.add(Order(user_id=user.id, product=product, amount=amount))
                else:
                    existing.amount = amount
            created[user.email] = user.id

        db.session.commit()
    return created


def main() -> None:
    print(json.dumps(seed(create_app())))


if __name__ == "__main__":
    main()
