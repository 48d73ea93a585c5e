"""Error types for pagination."""

from enum import StrEnum
from typing import ClassVar, final


class ErrorKind(StrEnum):
    """Classification of pagination errors."""

    CONFIGURATION = "configuration"
    INVALID_CURSOR = "invalid_cursor"
    INVALID_QUERY = "invalid_query"
    CONNECTION = "connection"
    QUERY = "query"


class PaginatorError(Exception):
    """Base error for all pagination operations."""

    __slots__ = ("kind", "message", "source")

    default_kind: ClassVar[ErrorKind] = ErrorKind.QUERY

    def __init__(
        self,
        message: str,
        kind: ErrorKind | None = None,
        source: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind if kind is not None else self.default_kind
        self.source = source

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, kind={self.kind!r})"


@final
class ConfigurationError(PaginatorError):
    """The paginator was set up incorrectly by the caller."""

    __slots__ = ()

    default_kind = ErrorKind.CONFIGURATION


@final
class InvalidCursorError(PaginatorError):
    """A cursor token failed validation and cannot be resumed from."""

    __slots__ = ()

    default_kind = ErrorKind.INVALID_CURSOR


@final
class QueryValidationError(PaginatorError):
    """The query does not have the shape keyset pagination requires."""

    __slots__ = ()

    default_kind = ErrorKind.INVALID_QUERY
