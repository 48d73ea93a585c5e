"""Keyset pagination engine.

The query is executed once per page. Before each execution the current
keyset is bound as query parameters; the query is expected to select only
the rows after that keyset (for example `WHERE u.id > :id ORDER BY u.id
LIMIT 100`). The discriminator values of the last row of a page become the
keyset of the next one. Pagination stops when the query returns no rows.

Compared to LIMIT/OFFSET, the database never scans and discards the rows of
the previous pages: each page starts directly from the last seen row.

Example, sorting users by a non-unique name with the id as tiebreaker:

    query = SqliteQuery(connection, '''
        SELECT id, name FROM users
        WHERE  name > :name OR (name = :name AND id > :id)
        ORDER  BY name, id
        LIMIT  100
    ''')
    paginator = Paginator(
        query,
        [
            Discriminator(param_name="name", attribute="name", default=""),
            Discriminator(param_name="id", attribute="id"),
        ],
        row_shape=RowShape.MAPPING,
    )
    for page in paginator:
        handle(page.rows())
        save(page.last_cursor())

A new paginator built with `cursor=<saved cursor>` resumes after the saved
row. Paginators are single-pass and not thread-safe: callers must not fetch
from one instance concurrently.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Self

from nvisy_paginator.cursor import CursorCodec, strip_trailing_limit
from nvisy_paginator.discriminator import Discriminator, Resolver, RowShape
from nvisy_paginator.errors import ConfigurationError
from nvisy_paginator.page import Item, Page
from nvisy_paginator.protocols import AsyncQuery, Query, SignatureNormalizer, ValueSerializer
from nvisy_paginator.serializers import DefaultValueSerializer, Scalar, is_scalar

logger = logging.getLogger(__name__)


class PaginatorState(StrEnum):
    """Lifecycle of a paginator."""

    READY = "ready"
    """A page can be fetched with the current keyset."""

    EXHAUSTED = "exhausted"
    """The last fetch returned no rows. Terminal."""


class _KeysetPaginator:
    """Keyset bookkeeping shared by the sync and async paginators."""

    __slots__ = ("_codec", "_keyset", "_pages", "_resolvers", "_serializer", "_state")

    _codec: CursorCodec
    _keyset: dict[str, Scalar]
    _pages: int
    _resolvers: dict[str, Resolver]
    _serializer: ValueSerializer
    _state: PaginatorState

    def __init__(
        self,
        signature: str,
        discriminators: Sequence[Discriminator],
        row_shape: RowShape,
        cursor: str | None,
        serializer: ValueSerializer | None,
        normalizer: SignatureNormalizer,
    ) -> None:
        if not discriminators:
            msg = "A paginator must have at least one discriminator, none given"
            raise ConfigurationError(msg)

        by_name = self._index(discriminators)

        self._serializer = serializer if serializer is not None else DefaultValueSerializer()
        self._resolvers = {name: d.resolver(row_shape) for name, d in by_name.items()}
        self._codec = CursorCodec(signature, list(by_name), normalizer)
        self._pages = 0
        self._state = PaginatorState.READY

        if cursor is None:
            self._keyset = {name: self._serialize(name, d.default) for name, d in by_name.items()}
            logger.debug("Starting pagination on %s", ", ".join(by_name))
        else:
            self._keyset = self._codec.decode(cursor)
            logger.debug("Resuming pagination on %s from cursor", ", ".join(by_name))

    @staticmethod
    def _index(discriminators: Sequence[Discriminator]) -> dict[str, Discriminator]:
        by_name: dict[str, Discriminator] = {}
        for discriminator in discriminators:
            if discriminator.param_name in by_name:
                msg = f"Duplicate discriminator parameter name: {discriminator.param_name!r}"
                raise ConfigurationError(msg)
            by_name[discriminator.param_name] = discriminator
        return by_name

    @property
    def state(self) -> PaginatorState:
        return self._state

    @property
    def keyset(self) -> Mapping[str, Scalar]:
        """Read-only view of the keyset the next fetch will start after."""
        return MappingProxyType(self._keyset)

    @property
    def codec(self) -> CursorCodec:
        return self._codec

    def _serialize(self, name: str, value: object) -> Scalar:
        serialized = self._serializer(value)
        if not is_scalar(serialized):
            msg = (
                f"Value for discriminator {name!r} must serialize to a scalar, "
                f"got {type(serialized).__name__}"
            )
            raise ConfigurationError(msg)
        return serialized

    def _bind(self, query: Query[Any] | AsyncQuery[Any]) -> None:
        for name, value in self._keyset.items():
            query.set_parameter(name, value)

    def _advance(self, rows: Iterable[Any]) -> Page | None:
        items: list[Item] = []
        keyset = self._keyset
        for row in rows:
            keyset = {
                name: self._serialize(name, resolve(row))
                for name, resolve in self._resolvers.items()
            }
            items.append(Item(data=row, cursor=self._codec.encode(list(keyset.values()))))

        if not items:
            self._state = PaginatorState.EXHAUSTED
            logger.debug("Pagination exhausted after %d pages", self._pages)
            return None

        self._keyset = keyset
        self._pages += 1
        logger.debug("Fetched page %d with %d rows", self._pages, len(items))
        return Page(items=tuple(items))


class Paginator(_KeysetPaginator):
    """Lazy, forward-only sequence of pages over a `Query`."""

    __slots__ = ("_query",)

    _query: Query[Any]

    def __init__(
        self,
        query: Query[Any],
        discriminators: Sequence[Discriminator],
        *,
        row_shape: RowShape = RowShape.OBJECT,
        cursor: str | None = None,
        serializer: ValueSerializer | None = None,
        normalizer: SignatureNormalizer = strip_trailing_limit,
    ) -> None:
        """Create a paginator.

        Raises ConfigurationError for an empty or duplicated discriminator
        list, and InvalidCursorError if `cursor` does not belong to this
        query and discriminator set.
        """
        super().__init__(
            query.signature_text(), discriminators, row_shape, cursor, serializer, normalizer
        )
        self._query = query

    def fetch(self) -> Page | None:
        """Fetch the next page, or return None once the rows are exhausted.

        Errors raised by the query propagate unchanged; the paginator should
        not be reused after one.
        """
        if self._state is PaginatorState.EXHAUSTED:
            return None
        self._bind(self._query)
        return self._advance(self._query.execute())

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> Page:
        page = self.fetch()
        if page is None:
            raise StopIteration
        return page


class AsyncPaginator(_KeysetPaginator):
    """Lazy, forward-only asynchronous sequence of pages over an `AsyncQuery`."""

    __slots__ = ("_query",)

    _query: AsyncQuery[Any]

    def __init__(
        self,
        query: AsyncQuery[Any],
        discriminators: Sequence[Discriminator],
        *,
        row_shape: RowShape = RowShape.OBJECT,
        cursor: str | None = None,
        serializer: ValueSerializer | None = None,
        normalizer: SignatureNormalizer = strip_trailing_limit,
    ) -> None:
        super().__init__(
            query.signature_text(), discriminators, row_shape, cursor, serializer, normalizer
        )
        self._query = query

    async def fetch(self) -> Page | None:
        """Fetch the next page, or return None once the rows are exhausted."""
        if self._state is PaginatorState.EXHAUSTED:
            return None
        self._bind(self._query)
        return self._advance(await self._query.execute())

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> Page:
        page = await self.fetch()
        if page is None:
            raise StopAsyncIteration
        return page
