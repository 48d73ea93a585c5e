"""Shared fixtures for the paginator tests."""

import sqlite3
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import pytest

from nvisy_paginator.providers.memory import MemoryQuery
from nvisy_paginator.serializers import Scalar

ID_SQL = "SELECT id, created_at FROM users WHERE id > :id ORDER BY id LIMIT 2"

COMPOUND_SQL = """
    SELECT id, created_at
    FROM   users
    WHERE  created_at > :created_at
    OR     (created_at = :created_at AND id > :id)
    ORDER  BY created_at, id
    LIMIT  2
"""


@dataclass(frozen=True)
class User:
    id: int
    created_at: datetime

    def get_id(self) -> int:
        return self.id


class ScriptedQuery:
    """Query returning pre-recorded batches, recording what was bound."""

    def __init__(self, batches: Sequence[Sequence[Any]], signature: str = ID_SQL) -> None:
        self._batches = list(batches)
        self._signature = signature
        self._hints: dict[str, object] = {}
        self.parameters: dict[str, Scalar] = {}
        self.bound: list[dict[str, Scalar]] = []

    def set_parameter(self, name: str, value: Scalar) -> None:
        self.parameters[name] = value

    def execute(self) -> list[Any]:
        self.bound.append(dict(self.parameters))
        return list(self._batches.pop(0)) if self._batches else []

    def signature_text(self) -> str:
        return self._signature

    def get_hint(self, name: str) -> object:
        return self._hints.get(name)

    def set_hint(self, name: str, value: object) -> None:
        self._hints[name] = value


def after_id(row: Mapping[str, Any], params: Mapping[str, Scalar]) -> bool:
    return row["id"] > params["id"]


def after_created_at_and_id(row: Mapping[str, Any], params: Mapping[str, Scalar]) -> bool:
    return (row["created_at"], row["id"]) > (params["created_at"], params["id"])


@pytest.fixture
def user_rows() -> list[dict[str, Any]]:
    return [
        {"id": 2, "created_at": "2018-01-01 00:00:00"},
        {"id": 3, "created_at": "2018-01-02 00:00:00"},
        {"id": 4, "created_at": "2018-01-03 00:00:00"},
        {"id": 5, "created_at": "2018-01-04 00:00:00"},
    ]


@pytest.fixture
def tied_rows() -> list[dict[str, Any]]:
    return [
        {"id": 4, "created_at": "2018-01-01 00:00:00"},
        {"id": 5, "created_at": "2018-01-01 00:00:00"},
        {"id": 2, "created_at": "2018-01-01 00:00:00"},
        {"id": 1, "created_at": "2018-01-04 00:00:00"},
    ]


@pytest.fixture
def users() -> list[User]:
    return [User(id=i, created_at=datetime(2018, 1, i - 1)) for i in (2, 3, 4, 5)]


@pytest.fixture
def id_query(user_rows: list[dict[str, Any]]) -> MemoryQuery[dict[str, Any]]:
    return MemoryQuery(
        user_rows,
        where=after_id,
        order_by=lambda row: row["id"],
        limit=2,
        signature=ID_SQL,
    )


@pytest.fixture
def connection() -> Iterator[sqlite3.Connection]:
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, created_at TEXT NOT NULL)")
    yield conn
    conn.close()


def insert_users(conn: sqlite3.Connection, rows: Sequence[Mapping[str, Any]]) -> None:
    conn.executemany("INSERT INTO users (id, created_at) VALUES (:id, :created_at)", rows)
