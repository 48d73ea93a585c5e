"""In-memory query over a sequence of rows."""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, ClassVar, Generic, TypeAlias, TypeVar

from nvisy_paginator.guards import run_guards
from nvisy_paginator.serializers import Scalar

logger = logging.getLogger(__name__)

Row = TypeVar("Row")

Predicate: TypeAlias = Callable[[Row, Mapping[str, Scalar]], bool]


class MemoryQuery(Generic[Row]):
    """Query evaluated in Python over a fixed list of rows.

    `where` receives each row and the bound parameters and decides whether
    the row belongs to the page; matching rows are sorted with `order_by`
    and cut to `limit`. `signature` stands in for the query text in cursor
    checksums and guards.
    """

    __slots__: ClassVar[tuple[str, ...]] = (
        "_hints",
        "_limit",
        "_order_by",
        "_parameters",
        "_rows",
        "_signature",
        "_where",
        "executions",
    )

    _hints: dict[str, object]
    _limit: int
    _order_by: Callable[[Row], Any]
    _parameters: dict[str, Scalar]
    _rows: tuple[Row, ...]
    _signature: str
    _where: Predicate[Row]
    executions: int

    def __init__(
        self,
        rows: Iterable[Row],
        *,
        where: Predicate[Row],
        order_by: Callable[[Row], Any],
        limit: int,
        signature: str,
    ) -> None:
        self._rows = tuple(rows)
        self._where = where
        self._order_by = order_by
        self._limit = limit
        self._signature = signature
        self._parameters = {}
        self._hints = {}
        self.executions = 0

    @property
    def parameters(self) -> Mapping[str, Scalar]:
        return dict(self._parameters)

    def set_parameter(self, name: str, value: Scalar) -> None:
        self._parameters[name] = value

    def execute(self) -> list[Row]:
        run_guards(self)
        self.executions += 1
        matching = [row for row in self._rows if self._where(row, self._parameters)]
        matching.sort(key=self._order_by)
        logger.debug("Memory query matched %d of %d rows", len(matching), len(self._rows))
        return matching[: self._limit]

    def signature_text(self) -> str:
        return self._signature

    def get_hint(self, name: str) -> object:
        return self._hints.get(name)

    def set_hint(self, name: str, value: object) -> None:
        self._hints[name] = value
