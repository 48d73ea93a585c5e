"""Serialization of discriminator values into cursor-safe scalars."""

from datetime import date
from enum import Enum
from typing import ClassVar, TypeAlias, TypeGuard

# Values that can be bound as query parameters and embedded in a cursor.
Scalar: TypeAlias = str | int | float | bool

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
"""Canonical textual form of dates and datetimes in a keyset."""


def is_scalar(value: object) -> TypeGuard[Scalar]:
    """Return True if the value can live in a keyset."""
    return isinstance(value, str | int | float | bool)


class DefaultValueSerializer:
    """Default strategy for mapping resolved values to scalars.

    Scalars pass through unchanged, dates and datetimes are rendered with
    `timestamp_format`, enum members are replaced by their value, and any
    other non-null value is converted to text. `None` is returned as is so
    that the paginator can reject it with a message naming the discriminator.
    """

    __slots__: ClassVar[tuple[str]] = ("timestamp_format",)

    timestamp_format: str

    def __init__(self, timestamp_format: str = TIMESTAMP_FORMAT) -> None:
        self.timestamp_format = timestamp_format

    def __call__(self, value: object) -> Scalar:
        if isinstance(value, Enum):
            value = value.value
        if value is None or is_scalar(value):
            return value  # pyright: ignore[reportReturnType]
        # datetime is a subclass of date
        if isinstance(value, date):
            return value.strftime(self.timestamp_format)
        return str(value)

    def __repr__(self) -> str:
        return f"DefaultValueSerializer(timestamp_format={self.timestamp_format!r})"
