"""Order model."""

from . import db


class Order(db.Model):
    """A product purchase owned by a user."""

    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE")
    )
    product = db.Column(db.String(100))
    amount = db.Column(db.Numeric(10, 2))

    @staticmethod
    def serialize(row) -> dict:
        """Serialize an ``orders`` row. Amounts stay Decimal and render as strings."""

        return {
            "id": row.id,
            "user_id": row.user_id,
            "product": row.product,
            "amount": row.amount,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Order {self.id} user={self.user_id}>"
