"""SQLAlchemy-backed store using the Flask-SQLAlchemy session."""

from __future__ import annotations

from typing import Any, Sequence

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Executable

from utils.errors import StoreError

from .abstract_storage import AbstractStore


def _error_message(error: Exception) -> str:
    """Return the driver's own message rather than SQLAlchemy's wrapper text."""

    original = getattr(error, "orig", None)
    if original is not None:
        return str(original).strip()
    return str(error).strip()


class SqlStore(AbstractStore):
    """Run single parameterized statements through the pooled session."""

    def __init__(self, database: SQLAlchemy):
        self.db = database

    def _execute(self, statement: Executable, fetch, *, commit: bool = False):
        session = self.db.session
        try:
            result = session.execute(statement)
            # Row conversion (e.g. Numeric on SQLite) can fail while fetching.
            rows = fetch(result)
            if commit:
                session.commit()
            return rows
        except (SQLAlchemyError, ArithmeticError, TypeError, ValueError) as exc:
            session.rollback()
            message = _error_message(exc)
            current_app.logger.warning("Statement failed: %s", message)
            raise StoreError(message) from exc

    def fetch_all(self, statement: Executable) -> Sequence[Row]:
        return self._execute(statement, lambda result: result.all())

    def fetch_one(self, statement: Executable) -> Row | None:
        return self._execute(statement, lambda result: result.first())

    def scalar(self, statement: Executable) -> Any:
        return self._execute(statement, lambda result: result.scalar())

    def write(self, statement: Executable) -> Row | None:
        return self._execute(
            statement,
            lambda result: result.first() if result.returns_rows else None,
            commit=True,
        )
