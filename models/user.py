"""User model definition."""

from . import db


class User(db.Model):
    """A registered API user. ``password`` holds the salted hash."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100))
    email = db.Column(db.String(100), unique=True)
    password = db.Column(db.String(255))

    @staticmethod
    def serialize(row, include_password: bool = True) -> dict:
        """Serialize a ``users`` row (ORM instance or result row)."""

        data = {
            "id": row.id,
            "name": row.name,
            "email": row.email,
        }
        if include_password:
            data["password"] = row.password
        return data

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
