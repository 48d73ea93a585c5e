"""Discriminators: the columns a keyset is made of."""

from collections.abc import Callable
from datetime import date, datetime
from enum import StrEnum
from typing import Any, ClassVar, TypeAlias, final

from pydantic import BaseModel

from nvisy_paginator.errors import ConfigurationError

Resolver: TypeAlias = Callable[[Any], object]


class RowShape(StrEnum):
    """How a string (or integer) discriminator attribute is looked up on a row."""

    OBJECT = "object"
    """Attribute lookup. A method found under the name is called."""

    MAPPING = "mapping"
    """Item lookup (`row[key]`): dicts, database records, tuples by index."""


@final
class _AttributeResolver:
    __slots__: ClassVar[tuple[str, str]] = ("_name", "_param_name")

    def __init__(self, param_name: str, name: str) -> None:
        self._param_name = param_name
        self._name = name

    def __call__(self, row: Any) -> object:
        try:
            value = getattr(row, self._name)
        except AttributeError as e:
            msg = (
                f"Discriminator {self._param_name!r}: "
                f"{type(row).__name__} has no attribute {self._name!r}"
            )
            raise ConfigurationError(msg, source=e) from e
        return value() if callable(value) else value


@final
class _ItemResolver:
    __slots__: ClassVar[tuple[str, str]] = ("_key", "_param_name")

    def __init__(self, param_name: str, key: str | int) -> None:
        self._param_name = param_name
        self._key = key

    def __call__(self, row: Any) -> object:
        try:
            return row[self._key]
        except (KeyError, IndexError, TypeError) as e:
            msg = (
                f"Discriminator {self._param_name!r}: "
                f"cannot look up {self._key!r} on {type(row).__name__}"
            )
            raise ConfigurationError(msg, source=e) from e


class Discriminator(BaseModel, frozen=True):
    """One column used to order and identify rows.

    With a query like `WHERE u.id > :id_cursor ORDER BY u.id`, the
    discriminator is `Discriminator(param_name="id_cursor", attribute="id")`.

    Compound keysets list several discriminators, most significant first,
    matching the ORDER BY clause; together they must identify a row
    uniquely.
    """

    param_name: str
    """Name of the query parameter bound to this column's keyset value."""

    attribute: str | int | Callable[[Any], object]
    """Attribute name, mapping key or callable extracting the value from a row."""

    default: str | int | float | bool | datetime | date = 0
    """Value bound when fetching the first page."""

    def resolver(self, shape: RowShape) -> Resolver:
        """Return the value extractor for rows of the given shape."""
        attribute = self.attribute
        if callable(attribute):
            return attribute
        if shape is RowShape.MAPPING:
            return _ItemResolver(self.param_name, attribute)
        if isinstance(attribute, int):
            msg = (
                f"Discriminator {self.param_name!r}: integer attribute {attribute} "
                f"requires RowShape.MAPPING"
            )
            raise ConfigurationError(msg)
        return _AttributeResolver(self.param_name, attribute)
