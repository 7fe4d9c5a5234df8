"""Tests for the order endpoints."""

from __future__ import annotations

from flask_jwt_extended import create_access_token

from models import db


def _place(client, headers, product, amount):
    response = client.post(
        "/api/orders", json={"product": product, "amount": amount}, headers=headers
    )
    assert response.status_code == 200
    return response.get_json()


def test_create_order_returns_row(client, register, login):
    alice = register("Alice", "alice@example.com", "AlicePass123")
    headers = login("alice@example.com", "AlicePass123")

    order = _place(client, headers, "Book", 10.00)

    assert order == {
        "id": order["id"],
        "user_id": alice["id"],
        "product": "Book",
        "amount": "10.00",
    }


def test_orders_are_joined_with_owner_name_and_scoped_to_caller(client, register, login):
    register("Alice", "alice@example.com", "AlicePass123")
    register("Bob", "bob@example.com", "BobPass123")
    alice_headers = login("alice@example.com", "AlicePass123")
    bob_headers = login("bob@example.com", "BobPass123")

    order = _place(client, alice_headers, "Lamp", "25.00")

    alice_orders = client.get("/api/orders", headers=alice_headers).get_json()
    bob_orders = client.get("/api/orders", headers=bob_headers).get_json()

    assert alice_orders == [
        {"id": order["id"], "name": "Alice", "product": "Lamp", "amount": "25.00"}
    ]
    assert bob_orders == []


def test_total_spent_sums_callers_orders(client, register, login):
    register("Alice", "alice@example.com", "AlicePass123")
    register("Bob", "bob@example.com", "BobPass123")
    headers = login("alice@example.com", "AlicePass123")
    _place(client, headers, "Book", 10.00)
    _place(client, headers, "Pen", 5.50)
    _place(client, login("bob@example.com", "BobPass123"), "Desk", 300)

    response = client.get("/api/orders/total", headers=headers)

    assert response.status_code == 200
    assert response.get_json() == {"total_spent": "15.50"}


def test_total_spent_is_null_without_orders(client, register, login):
    register("Alice", "alice@example.com", "AlicePass123")
    headers = login("alice@example.com", "AlicePass123")

    response = client.get("/api/orders/total", headers=headers)

    assert response.status_code == 200
    assert response.get_json() == {"total_spent": None}


def test_order_for_unknown_user_fails_with_400(app, client):
    with app.app_context():
        token = create_access_token(identity="999", additional_claims={"id": 999})

    response = client.post(
        "/api/orders",
        json={"product": "Ghost", "amount": 1},
        headers={"Authorization": token},
    )

    assert response.status_code == 400
    assert "FOREIGN KEY" in response.get_json()["error"]


def test_order_store_failures_are_400(app, client, register, login):
    register("Alice", "alice@example.com", "AlicePass123")
    headers = login("alice@example.com", "AlicePass123")
    with app.app_context():
        db.drop_all()

    listed = client.get("/api/orders", headers=headers)
    total = client.get("/api/orders/total", headers=headers)

    assert listed.status_code == 400
    assert total.status_code == 400
    assert "no such table" in listed.get_json()["error"]
