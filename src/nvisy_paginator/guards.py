"""Pre-flight checks on the shape of a pagination query.

Guards are attached to a query through its hints and run by the providers
before each execution, so a query that cannot be paginated by keyset fails
loudly instead of returning incomplete or repeated rows.
"""

import re
from collections.abc import Callable
from typing import Any, TypeAlias

from nvisy_paginator.errors import QueryValidationError
from nvisy_paginator.protocols import AsyncQuery, Query

Guard: TypeAlias = Callable[[str], None]

GUARDS_HINT = "nvisy_paginator.guards"
"""Hint under which the guards of a query are stored."""

_ORDER_BY = re.compile(r"\bORDER\s+BY\b", re.IGNORECASE)
_LIMIT = re.compile(r"\bLIMIT\s+(\d+|[:$]\w+)", re.IGNORECASE)
_QUOTED = re.compile(r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"")


def _top_level(sql: str) -> str:
    """Return the query text outside of quotes and parentheses."""
    sql = _QUOTED.sub("''", sql)
    depth = 0
    chars: list[str] = []
    for char in sql:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif depth == 0:
            chars.append(char)
    return "".join(chars)


def ensure_order_by(sql: str) -> None:
    """Require an ORDER BY clause on the outer query."""
    if not _ORDER_BY.search(_top_level(sql)):
        msg = "The pagination query must have an ORDER BY clause."
        raise QueryValidationError(msg)


def ensure_limit(sql: str) -> None:
    """Require a LIMIT clause on the outer query."""
    if not _LIMIT.search(_top_level(sql)):
        msg = "The pagination query must have a LIMIT clause."
        raise QueryValidationError(msg)


DEFAULT_GUARDS: tuple[Guard, ...] = (ensure_order_by, ensure_limit)


def attach_guards(query: Query[Any] | AsyncQuery[Any], *guards: Guard) -> None:
    """Add guards to the query, keeping the ones already attached."""
    attached = query.get_hint(GUARDS_HINT)
    current: list[Guard] = list(attached) if isinstance(attached, list | tuple) else []  # pyright: ignore[reportUnknownArgumentType]
    current.extend(g for g in (guards or DEFAULT_GUARDS) if g not in current)
    query.set_hint(GUARDS_HINT, current)


def run_guards(query: Query[Any] | AsyncQuery[Any]) -> None:
    """Run the guards attached to the query against its text."""
    attached = query.get_hint(GUARDS_HINT)
    if not attached:
        return
    sql = query.signature_text()
    for guard in attached:  # pyright: ignore[reportGeneralTypeIssues]
        guard(sql)
