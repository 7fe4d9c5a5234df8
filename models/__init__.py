"""Database initialization and model exports."""

import sqlite3

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine


db = SQLAlchemy()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # pragma: no cover - driver hook
    """SQLite ignores foreign keys unless asked on every connection."""

    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Import models to register them with SQLAlchemy metadata.
from .user import User  # noqa: E402,F401
from .order import Order  # noqa: E402,F401

__all__ = [
    "db",
    "User",
    "Order",
]
