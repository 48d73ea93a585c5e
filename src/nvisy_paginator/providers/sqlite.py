"""SQLite query using the standard library driver."""

import logging
import sqlite3
from typing import Any, ClassVar

from nvisy_paginator.errors import ErrorKind, PaginatorError
from nvisy_paginator.guards import run_guards
from nvisy_paginator.serializers import Scalar

logger = logging.getLogger(__name__)


class SqliteQuery:
    """Query with named `:param` placeholders run on a sqlite3 connection.

    Rows are returned as produced by the connection's `row_factory`; with
    `sqlite3.Row` they can be paginated with `RowShape.MAPPING`.
    """

    __slots__: ClassVar[tuple[str, str, str, str]] = (
        "_connection",
        "_hints",
        "_parameters",
        "_sql",
    )

    _connection: sqlite3.Connection
    _hints: dict[str, object]
    _parameters: dict[str, Scalar]
    _sql: str

    def __init__(self, connection: sqlite3.Connection, sql: str) -> None:
        self._connection = connection
        self._sql = sql
        self._parameters = {}
        self._hints = {}

    def set_parameter(self, name: str, value: Scalar) -> None:
        self._parameters[name] = value

    def execute(self) -> list[Any]:
        run_guards(self)
        logger.debug("Executing %s with %r", self._sql, self._parameters)
        try:
            return self._connection.execute(self._sql, self._parameters).fetchall()
        except sqlite3.Error as e:
            msg = f"Failed to execute SQLite query: {e}"
            raise PaginatorError(msg, kind=ErrorKind.QUERY, source=e) from e

    def signature_text(self) -> str:
        return self._sql

    def get_hint(self, name: str) -> object:
        return self._hints.get(name)

    def set_hint(self, name: str, value: object) -> None:
        self._hints[name] = value
