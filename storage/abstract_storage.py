"""Storage abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from sqlalchemy.engine import Row
from sqlalchemy.sql import Executable


class AbstractStore(ABC):
    """Interface for statement-per-call persistence backends.

    Every method runs exactly one statement and raises StoreError on failure.
    """

    @abstractmethod
    def fetch_all(self, statement: Executable) -> Sequence[Row]:
        """Execute a query and return every resulting row."""

    @abstractmethod
    def fetch_one(self, statement: Executable) -> Row | None:
        """Execute a query and return the first row, if any."""

    @abstractmethod
    def scalar(self, statement: Executable) -> Any:
        """Execute a query and return the first column of the first row."""

    @abstractmethod
    def write(self, statement: Executable) -> Row | None:
        """Execute a data-changing statement, commit, and return its first
        RETURNING row (None when the statement returns nothing)."""
