"""Persistence backends."""

from flask import current_app

from .abstract_storage import AbstractStore
from .sql_storage import SqlStore
from utils.errors import StoreError


def get_store() -> AbstractStore:
    """Return the store the application factory registered."""

    return current_app.extensions["store"]


__all__ = ["AbstractStore", "SqlStore", "StoreError", "get_store"]
